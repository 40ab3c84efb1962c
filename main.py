"""
Gesture Presenter - Hand-Gesture Slide Presentation

Entry point for the application.
"""
import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Gesture Presenter - Hand-Gesture Slide Presentation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--slides-dir",
        type=Path,
        default=None,
        help="Presentations directory (overrides config)",
    )

    parser.add_argument(
        "--add",
        type=Path,
        metavar="FILE",
        default=None,
        help="Add a PNG/JPEG/PPTX slide to the library and exit",
    )

    parser.add_argument(
        "--title",
        default=None,
        help="Title for the slide given with --add",
    )

    parser.add_argument(
        "--remove",
        metavar="ID",
        default=None,
        help="Remove a slide from the library and exit",
    )

    parser.add_argument(
        "--reorder",
        nargs="+",
        metavar="ID",
        default=None,
        help="Save a new slide order (every slide id, in order) and exit",
    )

    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete every slide from the library and exit",
    )

    parser.add_argument(
        "--start",
        metavar="ID",
        default=None,
        help="Start the presentation from this slide",
    )

    parser.add_argument(
        "--list",
        action="store_true",
        help="List slides in the library and exit",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show camera feed with landmarks and classifier diagnostics",
    )

    parser.add_argument(
        "--settings",
        action="store_true",
        help="Show the live gesture settings panel",
    )

    parser.add_argument(
        "--windowed",
        action="store_true",
        help="Do not go full screen",
    )

    return parser.parse_args(argv)


def open_library(config):
    from slides import SlideLibrary

    library = SlideLibrary(
        config.slides.directory,
        title=config.slides.title,
        max_file_size=config.slides.max_file_size,
    )
    library.initialize()
    return library


def run_library_command(args, config):
    """Handle --add / --remove / --reorder / --clear / --list."""
    from slides import SlideError

    library = open_library(config)
    try:
        if args.add:
            slide = library.add_slide(args.add, title=args.title)
            print(f"Added {slide.id}: {slide.name}")
        elif args.remove:
            library.remove_slide(args.remove)
            print(f"Removed {args.remove}")
        elif args.reorder:
            library.reorder(args.reorder)
            print(f"Reordered {len(args.reorder)} slides")
        elif args.clear:
            count = library.remove_all()
            print(f"Removed {count} slides")
        else:
            slides = library.list_slides()
            print(f"{library.title} ({len(slides)} slides)")
            for i, slide in enumerate(slides, 1):
                print(f"  {i:3d}. {slide.id}  {slide.name}")
    except SlideError as e:
        print(f"ERROR: {e}")
        return 1
    return 0


def run_webcam_debug(config):
    """
    Run webcam in debug mode - shows camera feed with landmarks.
    Useful for tuning swipe and pointer thresholds.
    """
    import cv2
    from gestures import GestureClassifier, GestureCallbacks
    from webcam import HandTracker

    tracker = HandTracker(config)
    classifier = GestureClassifier(config.gestures)

    events = []
    last_action = ""
    debug = [None]
    callbacks = GestureCallbacks(
        on_next=lambda: events.append("NEXT"),
        on_prev=lambda: events.append("PREV"),
        on_pointer_move=lambda p: None,
        on_debug=lambda info: debug.__setitem__(0, info),
    )

    print("Starting webcam debug mode...")
    print("Press 'q' to quit")
    print("-" * 40)

    if not tracker.start():
        print("ERROR: Could not open camera")
        return 1

    try:
        while True:
            landmarks = tracker.get_landmarks()
            classifier.process_frame(landmarks, config.gestures, callbacks)

            # Print navigation events to console
            for event in events:
                print(f"[{tracker.frame_count:5d}] {event}")
                last_action = event
            events.clear()

            frame = tracker.get_frame_with_landmarks(landmarks)
            if frame is not None:
                info = debug[0]
                h, w = frame.shape[:2]
                lines = [f"Last action: {last_action or '-'}"]
                if info is not None:
                    dx = f"{info.dx:+.3f}" if info.dx is not None else "-"
                    lines.append(f"centerX: {info.center_x:.3f}  dx: {dx}")
                    if info.pointer is not None:
                        px, py = info.pointer
                        lines.append(f"Pointer: ({px:.2f}, {py:.2f})")
                        cv2.circle(frame, (int(px * w), int(py * h)), 10, (68, 68, 239), -1)
                for i, line in enumerate(lines):
                    cv2.putText(
                        frame, line, (10, 30 + i * 25),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1
                    )

                cv2.imshow("Gesture Presenter Debug", frame)

            if cv2.waitKey(1) & 0xFF == ord('q'):
                break

    finally:
        tracker.stop()
        cv2.destroyAllWindows()

    return 0


def run_presentation(config, library, show_settings=False, start_id=None):
    """Run the presentation window with the gesture worker (Multithreaded)."""
    import signal
    import atexit
    from PyQt5.QtWidgets import QApplication
    from PyQt5.QtCore import QThread, Qt
    from webcam import WebcamWorker
    from ui import PresentationWindow, SettingsPanel

    deck = library.load_deck()
    if len(deck) == 0:
        print("No slides in library. Add some with --add FILE")
        return 1

    start_index = 0
    if start_id is not None:
        start_index = deck.index_of(start_id)
        if start_index == -1:
            print(f"Slide {start_id} not found, starting from the first slide")
            start_index = 0

    app = QApplication(sys.argv)

    window = PresentationWindow(deck, config.ui, start_index=start_index)
    if config.ui.fullscreen:
        window.showFullScreen()
    else:
        window.resize(1280, 720)
        window.show()

    settings = None
    if show_settings:
        settings = SettingsPanel(config.gestures)
        settings.show()

    # Setup background worker and thread
    thread = QThread()
    worker = WebcamWorker(config)
    worker.moveToThread(thread)

    def cleanup():
        """Ensure camera is released on exit."""
        print("\nCleaning up camera resources...")
        worker.stop_process()
        thread.quit()
        thread.wait(2000)
        print("Cleanup complete.")

    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    # Connect signals (QueuedConnection so UI updates happen in main thread)
    thread.started.connect(worker.start_process)
    worker.navigate_next.connect(window.on_gesture_next, Qt.QueuedConnection)
    worker.navigate_previous.connect(window.on_gesture_previous, Qt.QueuedConnection)
    worker.pointer_moved.connect(window.move_pointer, Qt.QueuedConnection)
    worker.frame_ready.connect(window.set_webcam_frame, Qt.QueuedConnection)
    worker.debug_info.connect(window.set_debug_info, Qt.QueuedConnection)
    worker.error.connect(lambda msg: print(f"WORKER ERROR: {msg}"), Qt.QueuedConnection)
    window.gesture_toggled.connect(worker.set_enabled, Qt.DirectConnection)
    window.presentation_ended.connect(app.quit)
    if settings is not None:
        settings.settings_changed.connect(worker.update_gesture_config, Qt.DirectConnection)

    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)  # Avoid double cleanup

    return result


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    from gestures import load_config
    config = load_config(args.config)

    # Apply CLI overrides
    if args.slides_dir:
        config.slides.directory = str(args.slides_dir)
    if args.windowed:
        config.ui.fullscreen = False
    if args.debug:
        config.ui.debug_overlay = True

    if args.add or args.remove or args.reorder or args.clear or args.list:
        return run_library_command(args, config)

    print(f"Gesture Presenter starting...")
    print(f"  Slides: {config.slides.directory}")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_webcam_debug(config)

    library = open_library(config)
    return run_presentation(
        config, library,
        show_settings=args.settings or config.ui.show_settings,
        start_id=args.start,
    )


if __name__ == "__main__":
    sys.exit(main())
