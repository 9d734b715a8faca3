"""
Command-line entry point for add-context.

Parses flags, configures logging and dispatches to one session flow.
All wizard exceptions are handled here and turned into exit codes:
cancellation exits 0, every other failure exits 1.
"""

import argparse
import sys
import traceback
from typing import Optional

import structlog

from add_context.audit import AuditLogger, configure_logging
from add_context.config import get_settings, resolve_context_paths
from add_context.errors import ContextWizardError, SessionCancelled
from add_context.orchestrator import ContextSessionFlow
from add_context.wizard import ConsolePrompter


logger = structlog.get_logger(__name__)

EPILOG = """\
Examples:
  add-context                 # Interactive wizard
  add-context --update        # Update existing
  add-context --tech-stack    # Update tech stack only
  add-context --patterns      # Update code patterns only
  add-context --global        # Save to global config
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="add-context",
        description="Interactive wizard to add project patterns to project-intelligence.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--update",
        action="store_true",
        help="Update existing context with review prompts",
    )
    mode.add_argument(
        "--tech-stack",
        action="store_true",
        help="Quick update of tech stack only",
    )
    mode.add_argument(
        "--patterns",
        action="store_true",
        help="Quick update of code patterns only",
    )

    parser.add_argument(
        "--global",
        dest="use_global",
        action="store_true",
        help="Save to ~/.config/opencode/context/ instead of project",
    )
    return parser


def main(
    argv: Optional[list[str]] = None,
    prompter: Optional[ConsolePrompter] = None,
) -> int:
    """Run add-context and return the process exit code."""
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as e:
        # --help exits 0; usage errors map onto the general failure code
        return 1 if e.code else 0

    audit = AuditLogger()
    prompter = prompter or ConsolePrompter()
    debug_mode = False

    try:
        app_settings = get_settings().app
        debug_mode = app_settings.debug_mode
        configure_logging(app_settings.log_level)

        paths = resolve_context_paths(use_global=args.use_global)
        flow = ContextSessionFlow(
            paths=paths,
            prompter=prompter,
            audit_logger=audit,
        )

        if args.tech_stack:
            flow.update_tech_stack_only()
        elif args.patterns:
            flow.update_patterns_only()
        else:
            flow.run(require_existing=args.update)

    except SessionCancelled as e:
        prompter.echo(e.message)
        return 0

    except ContextWizardError as e:
        audit.log_error(type(e).__name__, str(e))
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    except Exception as e:
        logger.exception("unhandled_error", error=str(e))
        audit.log_error(type(e).__name__, str(e))
        if debug_mode:
            traceback.print_exc()
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
