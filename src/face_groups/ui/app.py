"""Gradio application for grouping photos by person."""

from pathlib import Path

import gradio as gr

from face_groups.extraction.cropper import PillowCropper
from face_groups.extraction.extractor import FaceExtractor
from face_groups.picker import ImagePicker
from face_groups.sharing.coordinator import ExportCoordinator, ShareOutcome
from face_groups.sharing.service import FolderShareService
from face_groups.ui.screens import (
    NO_GROUPS_MESSAGE,
    FaceGroupsScreen,
    HomeScreen,
    PersonPhotosScreen,
    ResultsScreen,
)

CHECK = "✓ "

HOME_TAB, RESULTS_TAB, PEOPLE_TAB, PERSON_TAB = 0, 1, 2, 3


def _notify(outcome: ShareOutcome) -> None:
    if outcome.success:
        gr.Info(outcome.message)
    else:
        gr.Warning(outcome.message)


def _results_items(screen: ResultsScreen) -> list[tuple[str, str]]:
    return [
        (image.uri, (CHECK if screen.selection.is_selected(image.uri) else "") + Path(image.uri).name)
        for image in screen.images
    ]


def _people_items(screen: FaceGroupsScreen) -> list[tuple[str, str]]:
    return [(group.thumbnail, f"{group.name} ({len(group.photos)})") for group in screen.groups]


def _person_items(screen: PersonPhotosScreen) -> list[tuple[str, str]]:
    return [
        (photo.source_uri, (CHECK if screen.is_selected(photo) else "") + Path(photo.source_uri).name)
        for photo in screen.photos
    ]


def _share_label(count: int) -> str:
    return f"Share Selected ({count} photos)"


def create_app(library: str | Path | None = None) -> gr.Blocks:
    """Create and return the Gradio Blocks app.

    Args:
        library: Folder the picker is rooted at; typed folder paths resolve
            against it and picking fails when it is not readable.
    """
    # Lazy-loaded collaborators, shared by all sessions
    _cache: dict = {}

    def _get_detector():
        if "detector" not in _cache:
            from face_groups.detection.insightface_detector import InsightFaceDetector

            _cache["detector"] = InsightFaceDetector()
        return _cache["detector"]

    def _get_coordinator() -> ExportCoordinator:
        if "coordinator" not in _cache:
            _cache["coordinator"] = ExportCoordinator(FolderShareService())
        return _cache["coordinator"]

    # ── Select Photos ────────────────────────────────────────────────

    def _on_pick(files: list[str] | None, folder: str) -> tuple:
        sources = list(files or [])
        if folder.strip():
            sources.append(folder.strip())
        # Uploads live in Gradio's cache, outside the library folder.
        uploads = {Path(f).parent for f in files or []}
        home = HomeScreen(ImagePicker(root=library, allow=uploads), _get_detector())
        images = home.pick(sources)
        if home.error:
            gr.Warning(home.error)
        msg = f"{len(images)} images selected." if images else "No images selected."
        return home, [image.uri for image in images], msg

    def _on_process(home: HomeScreen | None, previous: FaceGroupsScreen | None) -> tuple:
        noop = (gr.update(),) * 9
        if home is None or not home.images:
            gr.Warning("Please select some images first")
            return noop
        payload = home.process()
        if payload is None:
            gr.Warning(home.error)
            return noop[:-1] + (home.error,)

        # Crops of the previous run are no longer shown once its groups are replaced.
        if previous is not None and isinstance(previous.extractor.cropper, PillowCropper):
            previous.extractor.cropper.discard()
        results = ResultsScreen(payload)
        groups = FaceGroupsScreen(payload, FaceExtractor(PillowCropper.for_run()))
        groups.load()
        if groups.error:
            gr.Warning(groups.error)
        people_info = groups.error or (groups.title if groups.groups else NO_GROUPS_MESSAGE)
        return (
            results, _results_items(results), f"## {results.title}",
            gr.update(value=_share_label(0)),
            groups, _people_items(groups), people_info,
            gr.Tabs(selected=PEOPLE_TAB), "",
        )

    # ── Results ──────────────────────────────────────────────────────

    def _on_results_select(results: ResultsScreen | None, evt: gr.SelectData) -> tuple:
        if results is None or evt.index is None:
            return gr.update(), gr.update()
        results.toggle(results.images[evt.index].uri)
        return _results_items(results), gr.update(value=_share_label(results.selection.size()))

    def _on_results_share(results: ResultsScreen | None) -> None:
        if results is None:
            gr.Warning("Please select photos to share")
            return
        _notify(results.share(_get_coordinator()))

    # ── People ───────────────────────────────────────────────────────

    def _on_person_open(groups: FaceGroupsScreen | None, evt: gr.SelectData) -> tuple:
        if groups is None or evt.index is None:
            return (gr.update(),) * 5
        group = groups.groups[evt.index]
        # Fresh screen per navigation: no selection carries over between people.
        person = PersonPhotosScreen(groups.open_person(group.id))
        return (
            person, _person_items(person),
            f"## {person.person_name}\n{person.subtitle}",
            gr.update(value=_share_label(0)),
            gr.Tabs(selected=PERSON_TAB),
        )

    # ── Person Photos ────────────────────────────────────────────────

    def _on_person_select(person: PersonPhotosScreen | None, evt: gr.SelectData) -> tuple:
        if person is None or evt.index is None:
            return gr.update(), gr.update()
        person.toggle(person.photos[evt.index].source_uri)
        return _person_items(person), gr.update(value=_share_label(person.selection.size()))

    def _on_person_share(person: PersonPhotosScreen | None) -> None:
        if person is None:
            gr.Warning("Please select photos to share")
            return
        _notify(person.share(_get_coordinator()))

    # ── Build UI ─────────────────────────────────────────────────────

    with gr.Blocks(title="Face Groups") as app:
        gr.Markdown("# Face Groups")

        home_state = gr.State(None)
        results_state = gr.State(None)
        groups_state = gr.State(None)
        person_state = gr.State(None)

        with gr.Tabs() as tabs:
            with gr.TabItem("Select Photos", id=HOME_TAB):
                gr.Markdown("## Select Photos with People")
                with gr.Row():
                    files_input = gr.File(
                        label="Photos", file_count="multiple", file_types=["image"], type="filepath"
                    )
                    folder_input = gr.Textbox(label="Or a folder path", scale=1)
                pick_btn = gr.Button("Select Photos")
                home_gallery = gr.Gallery(label="Selected photos", columns=3)
                home_info = gr.Markdown("")
                process_btn = gr.Button("Find People", variant="primary")

            with gr.TabItem("Results", id=RESULTS_TAB):
                results_title = gr.Markdown("")
                results_gallery = gr.Gallery(columns=2, allow_preview=False)
                results_share_btn = gr.Button(_share_label(0), variant="primary")

            with gr.TabItem("People", id=PEOPLE_TAB):
                people_info = gr.Markdown("")
                people_gallery = gr.Gallery(columns=2, allow_preview=False)

            with gr.TabItem("Person Photos", id=PERSON_TAB):
                person_title = gr.Markdown("")
                person_gallery = gr.Gallery(columns=2, allow_preview=False)
                person_share_btn = gr.Button(_share_label(0), variant="primary")

        pick_btn.click(
            fn=_on_pick,
            inputs=[files_input, folder_input],
            outputs=[home_state, home_gallery, home_info],
        )
        process_btn.click(
            fn=_on_process,
            inputs=[home_state, groups_state],
            outputs=[
                results_state, results_gallery, results_title, results_share_btn,
                groups_state, people_gallery, people_info,
                tabs, home_info,
            ],
        )
        results_gallery.select(
            fn=_on_results_select,
            inputs=[results_state],
            outputs=[results_gallery, results_share_btn],
        )
        results_share_btn.click(fn=_on_results_share, inputs=[results_state])
        people_gallery.select(
            fn=_on_person_open,
            inputs=[groups_state],
            outputs=[person_state, person_gallery, person_title, person_share_btn, tabs],
        )
        person_gallery.select(
            fn=_on_person_select,
            inputs=[person_state],
            outputs=[person_gallery, person_share_btn],
        )
        person_share_btn.click(fn=_on_person_share, inputs=[person_state])

    return app
