"""Face groups UI with Gradio."""

import argparse


def main() -> None:
    """CLI entry point for the Gradio UI."""
    parser = argparse.ArgumentParser(description="Face groups web UI")
    parser.add_argument(
        "--library",
        default=None,
        help="Photo folder that the UI may pick from (relative folder paths resolve here)",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Server host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=7860, help="Server port (default: 7860)")
    args = parser.parse_args()

    from face_groups.config import DATA_DIR
    from face_groups.log import configure_logging
    from face_groups.ui.app import create_app

    configure_logging()
    allowed = [str(DATA_DIR)]
    if args.library:
        allowed.append(args.library)
    app = create_app(library=args.library)
    app.launch(server_name=args.host, server_port=args.port, allowed_paths=allowed)
