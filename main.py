from typing import Callable

from plagcheck.core.config import load_settings
from plagcheck.core.logging_config import get_logger, setup_logging
from plagcheck.core.session import CheckerSession
from plagcheck.core.validation import ValidationError
from plagcheck.utils.report_writer import format_flag_lines, format_matrix_table

MENU = """
========= PLAGIARISM CHECKER =========
1. Add directory of .txt files
2. Toggle stopwords (Currently {stopwords})
3. Compute similarity
4. Set plagiarism threshold (Current {threshold:.2f}%)
5. Export report (CSV + Flags)
6. List loaded files
7. Clear loaded files
8. Exit"""

EXIT_CHOICE = 8


def run_shell(session: CheckerSession,
              input_fn: Callable[[str], str] = input,
              output_fn: Callable[[str], None] = print,
              output_dir: str = ".") -> None:
    """
    Menu loop over a CheckerSession.

    Reads choices with ``input_fn`` and prints with ``output_fn`` until the
    exit option is chosen or input runs out.
    """
    while True:
        output_fn(MENU.format(
            stopwords="ON" if session.config.use_stopwords else "OFF",
            threshold=session.config.threshold_percent,
        ))
        try:
            raw = input_fn("Choose option: ")
        except EOFError:
            output_fn("Exiting...")
            return

        try:
            choice = int(raw.strip())
        except ValueError:
            output_fn("Invalid input!")
            continue

        try:
            if choice == 1:
                count = session.load_directory(input_fn("Enter directory path: "))
                output_fn(f"Loaded {count} documents.")

            elif choice == 2:
                enabled = session.toggle_stopwords()
                output_fn(f"Stopwords are now {'ON' if enabled else 'OFF'}")

            elif choice == 3:
                report = session.compute()
                output_fn("\nSimilarity Matrix (%):")
                output_fn(format_matrix_table(report))

            elif choice == 4:
                threshold = session.set_threshold_percent(input_fn("Enter threshold (0-100): "))
                output_fn(f"Threshold set to {threshold * 100:.2f}%")

            elif choice == 5:
                matrix_path, flags_path = session.export(output_dir)
                for line in format_flag_lines(session.report):
                    output_fn(line)
                output_fn(f"Reports generated successfully! ({matrix_path}, {flags_path})")

            elif choice == 6:
                for path in session.list_files():
                    output_fn(path)

            elif choice == 7:
                session.clear()
                output_fn("Cleared files!")

            elif choice == EXIT_CHOICE:
                output_fn("Exiting...")
                return

            else:
                output_fn("Invalid input!")

        except EOFError:
            output_fn("Exiting...")
            return
        except ValidationError as e:
            output_fn(f"Error: {e.message}")
        except OSError as e:
            output_fn(f"Error: {e}")


def main():
    settings = load_settings()
    setup_logging(
        log_level=settings.log_level,
        log_dir=settings.log_dir,
        structured_logging=settings.structured_logs,
    )
    get_logger(__name__).info(
        f"Starting plagiarism checker (threshold {settings.threshold * 100:.2f}%)",
        extra={'threshold': settings.threshold}
    )
    session = CheckerSession(settings.session_config(), show_progress=True)
    run_shell(session, output_dir=settings.output_dir)


if __name__ == "__main__":
    main()
