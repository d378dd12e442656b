"""
Recorder App

Console front end for recording a cooking session and writing up the recipe.

Flow:
    setup → start → pause/resume → stop → recipe fields → save/export → new

State Flow (per session):
    IDLE → READY → RECORDING ⇄ PAUSED → STOPPED
                                           ↓
                          (saved to storage, recipe draft opened)

A stopped session is never reused: 'new' discards it and creates a
fresh one on the same device.
"""

import argparse
import logging
import logging.handlers
import signal
import sys
from pathlib import Path
from typing import Optional

from config.settings import (
    CAPTURE_MODE,
    CLOCK_TICK_INTERVAL,
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_FALLBACK_DIR,
    LOG_SERVICE_FILE,
    RECIPE_EXPORT_PATH,
)
from recipes import RecipeLibrary, RecipeProcessor, format_recipe_card
from recipes.library import matches
from recording import (
    PERMISSION_DENIED_MESSAGE,
    CaptureDeviceInterface,
    CaptureError,
    CaptureSession,
    PermissionDeniedError,
    RecordingFactory,
    RecordingPhase,
    RecordingResult,
    format_duration,
)
from recording.utils.recording_utils import format_file_size
from storage import RecordingStore, StorageConfig, StorageError, StoredRecording

HELP_TEXT = """Commands:
  setup                 Request camera and microphone access
  start                 Start recording
  pause / resume        Pause or resume recording
  stop                  Stop recording and save the video
  status                Show session status
  recipe <field> <text> Edit the recipe draft (use \\n between lines)
  save                  Save the recipe to the library
  export                Write the recipe as a text file
  library [term]        List saved recipes, optionally filtered
  show <n>              Show a saved recipe
  new                   Start over with a fresh session
  quit                  Exit"""


class RecorderApp:
    """
    Console coordinator.

    Owns the capture device, the current session, the recording store
    and the recipe library.

    Usage:
        app = RecorderApp(device, store)
        print(app.handle_command("setup"))
        app.run()  # Blocks until 'quit' or EOF
    """

    def __init__(
        self,
        device: CaptureDeviceInterface,
        store: Optional[RecordingStore] = None,
        library: Optional[RecipeLibrary] = None,
        export_dir: Path = RECIPE_EXPORT_PATH,
        clock_interval: float = CLOCK_TICK_INTERVAL,
        auto_tick: bool = True,
    ):
        self.logger = logging.getLogger(__name__)
        self.logger.info("Initializing Recorder App...")

        self.device = device
        self.store = store
        self.library = library or RecipeLibrary()
        self.export_dir = Path(export_dir)
        self.clock_interval = clock_interval
        self.auto_tick = auto_tick

        self.running = False

        # Last finished recording and its write-up
        self.last_result: Optional[RecordingResult] = None
        self.last_stored: Optional[StoredRecording] = None
        self.processor: Optional[RecipeProcessor] = None

        self.session = self._new_session()

        self.logger.info("Recorder App initialized successfully")

    def _new_session(self) -> CaptureSession:
        """Create a fresh session and wire its callbacks"""
        session = RecordingFactory.create_session(
            self.device,
            clock_interval=self.clock_interval,
            auto_tick=self.auto_tick,
        )
        session.on_complete = self._handle_recording_complete
        session.on_error = self._handle_recording_error
        session.on_state_change = self._handle_state_change
        return session

    # =========================================================================
    # MAIN LOOP
    # =========================================================================

    def run(self, stream=None) -> None:
        """
        Read commands line by line until 'quit' or end of input.

        Args:
            stream: Input stream (default: stdin)
        """
        stream = stream or sys.stdin
        self.running = True

        print("Recipe Keeper - type 'help' for commands")

        for line in stream:
            if not line.strip():
                continue
            print(self.handle_command(line))
            if not self.running:
                break

        self.running = False

    def handle_command(self, line: str) -> str:
        """
        Dispatch one console command.

        Returns:
            Text to display
        """
        parts = line.strip().split(maxsplit=2)
        if not parts:
            return ""

        command = parts[0].lower()
        args = parts[1:]

        handlers = {
            "setup": self._cmd_setup,
            "start": self._cmd_start,
            "pause": self._cmd_pause,
            "resume": self._cmd_resume,
            "stop": self._cmd_stop,
            "status": self._cmd_status,
            "new": self._cmd_new,
            "save": self._cmd_save,
            "export": self._cmd_export,
            "help": self._cmd_help,
            "quit": self._cmd_quit,
        }

        arg_handlers = {
            "recipe": self._cmd_recipe,
            "library": self._cmd_library,
            "show": self._cmd_show,
        }

        if command in arg_handlers:
            return arg_handlers[command](args)

        handler = handlers.get(command)
        if handler is None:
            self.logger.warning(f"Unknown command: {command}")
            return f"Unknown command: {command} (type 'help')"

        return handler()

    # =========================================================================
    # RECORDING COMMANDS
    # =========================================================================

    def _cmd_setup(self) -> str:
        if self.session.phase in (RecordingPhase.RECORDING, RecordingPhase.PAUSED):
            return f"Camera already in use - setup ignored (phase: {self.session.phase.value})"

        try:
            stream = self.session.request_access()
        except PermissionDeniedError as e:
            self.logger.warning(f"Camera access denied: {e}")
            return PERMISSION_DENIED_MESSAGE

        if stream is None or not self.session.has_access:
            return f"Cannot set up camera (phase: {self.session.phase.value})"

        return "Camera and microphone ready"

    def _cmd_start(self) -> str:
        try:
            started = self.session.start()
        except CaptureError as e:
            # The failed session is closed; give the user a fresh one
            self.session = self._new_session()
            return f"Recording failed to start: {e}"

        if not started:
            return f"Cannot start recording (phase: {self.session.phase.value})"
        return "Recording started"

    def _cmd_pause(self) -> str:
        if not self.session.pause():
            return f"Cannot pause (phase: {self.session.phase.value})"
        return f"Paused at {self.session.formatted_elapsed}"

    def _cmd_resume(self) -> str:
        if not self.session.resume():
            return f"Cannot resume (phase: {self.session.phase.value})"
        return "Recording resumed"

    def _cmd_stop(self) -> str:
        result = self.session.stop()
        if result is None:
            return f"Cannot stop (phase: {self.session.phase.value})"

        message = (
            f"Recording stopped: {format_duration(result.duration)}, "
            f"{format_file_size(result.artifact.size)}"
        )
        if self.last_stored is not None and self.last_result is result:
            message += f"\nSaved to {self.last_stored.filepath}"
        return message

    def _cmd_status(self) -> str:
        lines = [self.session.get_session_info()]
        if self.processor is not None and self.processor.draft is not None:
            title = self.processor.draft.title or "(untitled)"
            lines.append(f"Recipe draft: {title}")
        lines.append(f"Recipes in library: {len(self.library)}")
        if self.store is not None:
            info = self.store.get_storage_info()
            lines.append(
                f"Saved recordings: {info['recording_count']} "
                f"({format_file_size(info['total_size_bytes'])}) in {info['base_path']}",
            )
        return "\n".join(lines)

    def _cmd_new(self) -> str:
        self.session.cleanup()
        self.session = self._new_session()
        self.processor = None
        self.last_result = None
        self.last_stored = None
        self.logger.info("New recording session created")
        return "New session ready - run 'setup' to enable the camera"

    # =========================================================================
    # RECIPE COMMANDS
    # =========================================================================

    def _cmd_recipe(self, args) -> str:
        if self.processor is None:
            return "No finished recording - stop a recording first"
        if len(args) < 2:
            return "Usage: recipe <field> <text>"

        field_name, value = args[0].lower(), args[1]

        self.processor.start_manual()
        try:
            self.processor.update(**{field_name: value.replace("\\n", "\n")})
        except ValueError as e:
            return str(e)

        return f"Updated {field_name}"

    def _cmd_save(self) -> str:
        if self.processor is None or not self.processor.is_editing:
            return "No recipe draft to save"

        recipe = self.processor.save()
        return f"Saved '{recipe.title or '(untitled)'}' ({len(self.library)} in library)"

    def _cmd_export(self) -> str:
        if self.processor is None or not self.processor.is_editing:
            return "No recipe draft to export"

        try:
            path = self.processor.export(self.export_dir)
        except OSError as e:
            self.logger.error(f"Recipe export failed: {e}")
            return f"Export failed: {e}"

        return f"Exported to {path}"

    def _cmd_library(self, args) -> str:
        term = " ".join(args)
        if len(self.library) == 0:
            return "No saved recipes yet"

        # Numbers are positions in the full listing, as used by 'show <n>'
        listing = [
            f"{index}. {recipe.title or '(untitled)'}"
            for index, recipe in enumerate(self.library.all(), start=1)
            if matches(recipe, term)
        ]
        if not listing:
            return f"No recipes match '{term}'"
        return "\n".join(listing)

    def _cmd_show(self, args) -> str:
        if len(args) != 1 or not args[0].isdigit():
            return "Usage: show <number>"

        recipe = self.library.get(int(args[0]))
        if recipe is None:
            return f"No recipe #{args[0]} ({len(self.library)} in library)"
        return format_recipe_card(recipe)

    def _cmd_help(self) -> str:
        return HELP_TEXT

    def _cmd_quit(self) -> str:
        self.running = False
        return "Goodbye"

    # =========================================================================
    # SESSION CALLBACKS
    # =========================================================================

    def _handle_recording_complete(self, result: RecordingResult) -> None:
        """Persist the recording and open a recipe processor for it"""
        self.last_result = result
        self.last_stored = None
        self.processor = RecipeProcessor(result, on_save=self.library.add)

        if self.store is None:
            return

        try:
            self.last_stored = self.store.save(result)
        except StorageError as e:
            self.logger.error(f"Failed to save recording: {e}")

    def _handle_recording_error(self, error_message: str) -> None:
        self.logger.error(f"Recording error: {error_message}")

    def _handle_state_change(self, old_phase, new_phase) -> None:
        self.logger.debug(f"Session phase: {old_phase.value} → {new_phase.value}")

    # =========================================================================
    # SHUTDOWN
    # =========================================================================

    def shutdown(self) -> None:
        """Abandon any active session and release the device"""
        self.logger.info("Shutting down Recorder App...")
        self.running = False
        self.session.cleanup()
        self.device.cleanup()
        self.logger.info("Recorder App shutdown complete")


def setup_logging(level: str = "INFO") -> None:
    """
    Setup logging with rotation.

    Logs to both console and file:
    - Daily rotation
    - Keep LOG_BACKUP_COUNT days of logs
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    log_format = logging.Formatter("%(message)s | %(name)s")

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(log_format)
    logger.addHandler(console_handler)

    log_file = Path(LOG_DIR) / LOG_SERVICE_FILE
    try:
        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(log_file),
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except (PermissionError, FileNotFoundError):
        # Fallback to local logs directory if the log dir is not writable
        logs_dir = Path(LOG_FALLBACK_DIR)
        logs_dir.mkdir(exist_ok=True)

        fallback_log = logs_dir / LOG_SERVICE_FILE
        logger.warning(f"Cannot write to {log_file}, using fallback: {fallback_log}")

        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(fallback_log),
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )

    file_handler.setLevel(level)
    file_handler.setFormatter(log_format)
    logger.addHandler(file_handler)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="recipe-keeper",
        description="Record a cooking session and write up the recipe",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the mock capture device instead of FFmpeg",
    )
    parser.add_argument(
        "--storage",
        type=Path,
        default=None,
        help="Directory for saved recordings (overrides storage.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser.parse_args(argv)


def main(argv=None):
    """
    Main entry point.

    Sets up logging, builds the app and runs the console loop.
    """
    args = parse_args(argv)
    setup_logging(args.log_level)

    logger = logging.getLogger(__name__)
    logger.info("=" * 60)
    logger.info("Recipe Keeper Starting")
    logger.info("=" * 60)

    def _signal_handler(signum, _frame):
        logger.info(f"Received signal {signal.Signals(signum).name}, shutting down...")
        sys.exit(0)

    signal.signal(signal.SIGTERM, _signal_handler)

    app = None
    try:
        config = StorageConfig()
        if args.storage is not None:
            config.set("recordings_base_path", str(args.storage.resolve()), save=False)

        device = RecordingFactory.create_device(mode="mock" if args.mock else CAPTURE_MODE)
        app = RecorderApp(device, store=RecordingStore(config))
        app.run()
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    except Exception as e:
        logger.critical(f"Fatal error in main: {e}", exc_info=True)
        sys.exit(1)
    finally:
        if app is not None:
            app.shutdown()


if __name__ == "__main__":
    main()
