"""Pipeline CLI: detect faces, group them into people and export photos."""

import argparse


def main() -> None:
    """CLI entry point for face grouping."""
    parser = argparse.ArgumentParser(description="Group photos by the people in them")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show per-image progress logs")
    subparsers = parser.add_subparsers(dest="command")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("sources", nargs="+", help="Image files, folders or http(s) URLs")
    common.add_argument("--device", default=None, help="Device: cuda or cpu (default: from .env)")
    common.add_argument(
        "--mode",
        choices=["fast", "accurate"],
        default="fast",
        help="Detector mode (default: fast)",
    )
    common.add_argument(
        "--root", default=None, help="Library folder; sources outside it are skipped"
    )

    # detect
    subparsers.add_parser("detect", parents=[common], help="List faces found in each image")

    # group
    group_parser = subparsers.add_parser(
        "group", parents=[common], help="Group detected faces into people"
    )
    group_parser.add_argument("--crop-dir", default=None, help="Where face crops are written")

    # export
    export_parser = subparsers.add_parser(
        "export", parents=[common], help="Share the photos of one person"
    )
    export_parser.add_argument("--crop-dir", default=None, help="Where face crops are written")
    export_parser.add_argument("--person", type=int, required=True, help="Person group ID")
    export_parser.add_argument(
        "--photo",
        action="append",
        default=None,
        help="Photo URI to share (repeatable; default: all photos of the person)",
    )
    export_parser.add_argument("--output", default=None, help="Export folder (default: from .env)")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return

    from face_groups.log import configure_logging

    configure_logging("DEBUG" if args.verbose else None)

    if args.command == "detect":
        _cmd_detect(args)
    elif args.command == "group":
        _cmd_group(args)
    elif args.command == "export":
        _cmd_export(args)


def _build_detector(args: argparse.Namespace):
    """Load InsightFace with the requested options."""
    from face_groups.config import DETECTOR_DEVICE
    from face_groups.detection.detector import DetectorOptions
    from face_groups.detection.insightface_detector import InsightFaceDetector

    device = args.device or DETECTOR_DEVICE
    print(f"Loading InsightFace model on {device}...")
    return InsightFaceDetector(device=device, options=DetectorOptions(mode=args.mode))


def _pick(args: argparse.Namespace):
    from face_groups.picker import ImagePicker, pick_images

    return pick_images(ImagePicker(root=args.root), args.sources)


def _detect_with_progress(detector, images):
    """Run detection behind a rich progress bar."""
    from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

    from face_groups.pipeline.runner import process_images

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TextColumn("{task.completed}/{task.total}"),
    ) as progress:
        task = progress.add_task("Detecting faces", total=len(images))
        return process_images(detector, images, on_image=lambda _image, _n: progress.advance(task))


def _load_groups(args: argparse.Namespace):
    """Pick, detect and group; return the groups screen or None on error."""
    from face_groups.errors import FaceGroupsError
    from face_groups.extraction.cropper import PillowCropper
    from face_groups.extraction.extractor import FaceExtractor
    from face_groups.models import face_groups_payload
    from face_groups.ui.screens import FaceGroupsScreen

    try:
        images = _pick(args)
        annotated = _detect_with_progress(_build_detector(args), images)
    except FaceGroupsError as exc:
        print(f"Error: {exc.message}")
        return None

    screen = FaceGroupsScreen(
        face_groups_payload(annotated), FaceExtractor(PillowCropper.for_run(args.crop_dir))
    )
    screen.load()
    if screen.error:
        print(f"Error: {screen.error}")
        return None
    return screen


def _cmd_detect(args: argparse.Namespace) -> None:
    """Print the faces found in each picked image."""
    from face_groups.errors import FaceGroupsError

    try:
        images = _pick(args)
        annotated = _detect_with_progress(_build_detector(args), images)
    except FaceGroupsError as exc:
        print(f"Error: {exc.message}")
        return

    for image in annotated:
        print(f"{image.uri}  ({image.width}x{image.height})  {len(image.faces)} faces")
        for face in image.faces:
            print(
                f"  x={face.origin.x:.0f} y={face.origin.y:.0f} "
                f"w={face.size.width:.0f} h={face.size.height:.0f}"
            )
    print(f"\nImages with faces: {len(annotated)}/{len(images)}")


def _cmd_group(args: argparse.Namespace) -> None:
    """Print the person groups as a table."""
    from rich.console import Console
    from rich.table import Table

    screen = _load_groups(args)
    if screen is None:
        return

    table = Table(title=screen.title)
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Photos", justify="right")
    table.add_column("Source")
    table.add_column("Thumbnail")
    for group in screen.groups:
        table.add_row(
            str(group.id), group.name, str(len(group.photos)), group.source_image, group.thumbnail
        )
    Console().print(table)


def _cmd_export(args: argparse.Namespace) -> None:
    """Share a person's photos into the export folder."""
    from face_groups.sharing.coordinator import ExportCoordinator
    from face_groups.sharing.service import FolderShareService
    from face_groups.ui.screens import PersonPhotosScreen

    screen = _load_groups(args)
    if screen is None:
        return

    try:
        payload = screen.open_person(args.person)
    except KeyError:
        print(f"Error: no person with ID {args.person} (found {len(screen.groups)})")
        return

    person = PersonPhotosScreen(payload)
    wanted = args.photo or [photo.source_uri for photo in person.photos]
    for uri in dict.fromkeys(wanted):
        person.toggle(uri)

    outcome = person.share(ExportCoordinator(FolderShareService(args.output)))
    prefix = "Done." if outcome.success else "Error:"
    print(f"{prefix} {outcome.message}")
