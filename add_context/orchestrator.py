"""
Session Orchestrator for add-context

This module ties together all the components and defines the
end-to-end flows:
1. Interactive session (external check → detect → mode → render →
   validate → confirm → write)
2. Tech-stack-only update
3. Patterns-only update

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing is written without explicit confirmation
- Nothing is written if validation fails
- Replace all backs up before the point of no return
- Every step is audited

Cancelling at any prompt raises SessionCancelled and leaves the
filesystem as it was (apart from a Replace all backup the user agreed to).
"""

from datetime import date
from pathlib import Path
from typing import Optional

from add_context.audit import AuditLogger
from add_context.config.paths import ContextPaths
from add_context.document import DocumentRenderer, count_lines, parse_technical_domain
from add_context.errors import (
    DocumentNotFoundError,
    InvalidChoiceError,
    SessionCancelled,
    ValidationFailedError,
)
from add_context.models.intelligence import (
    ExistingDocumentChoice,
    ExternalContextChoice,
    ListReviewChoice,
    ProjectIntelligence,
    ReviewChoice,
    increment_version,
)
from add_context.services import (
    ContextStorageInterface,
    FileSystemContextStorage,
    find_external_context_files,
)
from add_context.validation import DocumentValidator
from add_context.wizard import ConsolePrompter, FieldCollector


SCALAR_OPTIONS = "Options: 1. Keep | 2. Update | 3. Remove\n\nChoose [1/2/3]: "
LIST_OPTIONS = "Options: 1. Keep | 2. Add new | 3. Remove all\n\nChoose [1/2/3]: "


class ContextSessionFlow:
    """
    Orchestrates one add-context session.

    Flow:
    1. External context → offer harvest instead
    2. Detect → create, or menu for an existing document
    3. Mode → create / review / add / replace
    4. Render → technical-domain.md + navigation.md
    5. Validate → hard gate
    6. Confirm → user explicitly approves, then write
    """

    def __init__(
        self,
        paths: ContextPaths,
        prompter: Optional[ConsolePrompter] = None,
        storage: Optional[ContextStorageInterface] = None,
        renderer: Optional[DocumentRenderer] = None,
        validator: Optional[DocumentValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._paths = paths
        self._prompter = prompter or ConsolePrompter()
        self._collector = FieldCollector(self._prompter)
        self._storage = storage or FileSystemContextStorage(paths)
        self._renderer = renderer or DocumentRenderer()
        self._validator = validator or DocumentValidator()
        self._audit = audit_logger or AuditLogger()

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def run(self, require_existing: bool = False) -> list[Path]:
        """
        Run the full interactive session.

        Args:
            require_existing: --update; refuse the first-time creation path

        Returns:
            Paths of the written files
        """
        self._audit.log_session_started(
            "update" if require_existing else "interactive",
            self._paths.context_dir,
        )
        self.check_external_context()
        data = self.detect_existing(require_existing=require_existing)
        return self.confirm_and_save(data)

    def update_tech_stack_only(self) -> list[Path]:
        """Ask the four stack fields and merge them into the existing record."""
        self._audit.log_session_started("tech_stack", self._paths.context_dir)
        p = self._prompter

        existing = None
        if self._storage.document_exists():
            existing = self._load_existing()
            p.header("Update Tech Stack")
            p.echo("Current tech stack:")
            self._show_tech_stack(existing)
            p.echo()
        else:
            p.header("No existing tech stack found. Let's create it!")

        tech_stack = self._collector.ask_tech_stack()

        if existing is None:
            data = ProjectIntelligence(tech_stack=tech_stack)
        else:
            data = existing
            data.tech_stack = tech_stack
            data.bump_version()

        return self.confirm_and_save(data)

    def update_patterns_only(self) -> list[Path]:
        """Re-read the API and component patterns; "skip" keeps the current one."""
        self._audit.log_session_started("patterns", self._paths.context_dir)
        if not self._storage.document_exists():
            raise DocumentNotFoundError(
                "No existing patterns found. Run add-context to create new context."
            )

        data = self._load_existing()
        p = self._prompter

        p.header("Update Code Patterns")
        p.echo("Current API pattern:")
        self._show_pattern(data.api_pattern)
        p.echo()
        api_pattern = self._collector.ask_pattern(
            'New API pattern (or "skip" to keep current):'
        )
        if api_pattern is not None:
            data.api_pattern = api_pattern

        p.echo()
        p.echo("Current component pattern:")
        self._show_pattern(data.component_pattern)
        p.echo()
        component_pattern = self._collector.ask_pattern(
            'New component pattern (or "skip" to keep current):'
        )
        if component_pattern is not None:
            data.component_pattern = component_pattern

        data.bump_version()
        return self.confirm_and_save(data)

    # -------------------------------------------------------------------------
    # Stage 1: external context
    # -------------------------------------------------------------------------

    def check_external_context(self) -> None:
        files = find_external_context_files(self._paths.tmp_dir)
        if not files:
            return

        self._audit.log_external_context_detected([f.name for f in files])
        p = self._prompter
        tmp_name = self._paths.tmp_dir.name

        p.header(f"Found external context files in {tmp_name}/")
        p.echo("Files found:")
        for f in files:
            p.echo(f"  📄 {tmp_name}/{f.name} ({f.human_size})")
        p.echo()
        p.echo("These files can be extracted and organized into permanent context.")
        p.echo()

        choice = p.ask(
            "Options:\n"
            "  1. Continue with /add-context (ignore external files for now)\n"
            "  2. Manage external files first (via /context harvest)\n\n"
            "Choose [1/2]: "
        )

        if choice == ExternalContextChoice.CONTINUE.value:
            p.echo()
            return

        if choice == ExternalContextChoice.HARVEST.value:
            p.header("Manage External Context Files")
            p.echo("To manage external context files, use the /context command:")
            p.echo()
            p.echo("  /context harvest")
            p.echo()
            p.echo("This will:")
            p.echo(f"  ✓ Extract knowledge from {tmp_name}/ files")
            p.echo("  ✓ Organize into project-intelligence/")
            p.echo("  ✓ Clean up temporary files")
            p.echo("  ✓ Update navigation.md")
            p.echo()
            p.echo("After harvesting, run /add-context again to create project intelligence.")
            p.echo()
            self._audit.log_session_cancelled("harvest_first")
            raise SessionCancelled("Exiting. Run /context harvest to process external files.")

        raise InvalidChoiceError(choice)

    # -------------------------------------------------------------------------
    # Stages 2-3: detection and mode dispatch
    # -------------------------------------------------------------------------

    def detect_existing(self, require_existing: bool = False) -> ProjectIntelligence:
        """Branch on document presence and return the record to write."""
        p = self._prompter

        if not self._storage.document_exists():
            if require_existing:
                raise DocumentNotFoundError(
                    "No existing project intelligence found. "
                    "Run add-context without --update to create it."
                )

            p.header("No project intelligence found. Let's create it!")
            p.echo(f"Saving to: {self._storage.location}")
            p.echo()
            p.echo("Will create:")
            p.echo(f"  - {self._paths.document_path.name} (tech stack & patterns)")
            p.echo(f"  - {self._paths.navigation_path.name} (quick overview)")
            p.echo()
            p.echo("Takes ~5 min. Follows @mvi_compliance (<200 lines).")
            p.echo()
            self._confirm_or_cancel("Ready?", reason="not_ready")
            p.echo()

            self._audit.log_mode_selected("create")
            return self._collector.run_wizard()

        data = self._load_existing()
        self._audit.log_existing_document_detected(data.version)
        self._show_existing(data)

        p.echo("Options:")
        p.echo("  1. Review and update patterns (show each one)")
        p.echo("  2. Add new patterns (keep all existing)")
        p.echo("  3. Replace all patterns (start fresh)")
        p.echo("  4. Cancel")
        p.echo()

        answer = p.ask("Choose [1/2/3/4]: ")
        try:
            choice = ExistingDocumentChoice(answer)
        except ValueError:
            raise InvalidChoiceError(answer)

        self._audit.log_mode_selected(choice.name.lower())

        if choice == ExistingDocumentChoice.REVIEW:
            p.echo()
            return self.review_patterns(data)

        if choice == ExistingDocumentChoice.ADD:
            p.echo()
            p.echo("Keeping all existing patterns. Adding new patterns...")
            p.echo()
            updated = self._collector.run_wizard(seed=data)
            updated.bump_version()
            return updated

        if choice == ExistingDocumentChoice.REPLACE:
            return self.replace_all(data)

        self._audit.log_session_cancelled("menu_cancel")
        raise SessionCancelled()

    def review_patterns(self, data: ProjectIntelligence) -> ProjectIntelligence:
        """
        Walk the six field groups with Keep / Update / Remove.

        The version is bumped once at the end, even if everything was kept.
        """
        p = self._prompter
        c = self._collector
        changes = []

        # 1/6 tech stack
        p.header("Pattern 1/6: Tech Stack")
        p.echo("Current:")
        self._show_tech_stack(data)
        p.echo()
        choice = _scalar_choice(p.ask(SCALAR_OPTIONS))
        if choice == ReviewChoice.UPDATE:
            data.tech_stack = c.ask_tech_stack()
            changes.append("✓ Tech Stack: Updated")
        elif choice == ReviewChoice.REMOVE:
            data.tech_stack = None
            changes.append("✓ Tech Stack: Removed")
        else:
            changes.append("✓ Tech Stack: Kept")
        p.echo()

        # 2/6 and 3/6 patterns
        for index, label, attr in (
            (2, "API", "api_pattern"),
            (3, "Component", "component_pattern"),
        ):
            p.header(f"Pattern {index}/6: {label} Pattern")
            self._show_pattern(getattr(data, attr))
            p.echo()
            choice = _scalar_choice(p.ask(SCALAR_OPTIONS))
            if choice == ReviewChoice.UPDATE:
                pattern = c.ask_pattern(f'Paste new {label.lower()} pattern (or "skip"):')
                if pattern is not None:
                    setattr(data, attr, pattern)
                changes.append(f"✓ {label}: Updated")
            elif choice == ReviewChoice.REMOVE:
                setattr(data, attr, None)
                changes.append(f"✓ {label}: Removed")
            else:
                changes.append(f"✓ {label}: Kept")
            p.echo()

        # 4/6 naming
        p.header("Pattern 4/6: Naming Conventions")
        if data.naming:
            p.echo("Current:")
            p.echo(f"  Files: {data.naming.files}")
            p.echo(f"  Components: {data.naming.components}")
            p.echo(f"  Functions: {data.naming.functions}")
            p.echo(f"  Database: {data.naming.database}")
        else:
            p.echo("(none)")
        p.echo()
        choice = _scalar_choice(p.ask(SCALAR_OPTIONS))
        if choice == ReviewChoice.UPDATE:
            data.naming = c.ask_naming()
            changes.append("✓ Naming: Updated")
        elif choice == ReviewChoice.REMOVE:
            data.naming = None
            changes.append("✓ Naming: Removed")
        else:
            changes.append("✓ Naming: Kept")
        p.echo()

        # 5/6 and 6/6 lists
        for index, title, label, attr, prompt in (
            (5, "Code Standards", "Standards", "standards",
             "Add new standards (one per line):"),
            (6, "Security Requirements", "Security", "security",
             "Add new requirements (one per line):"),
        ):
            p.header(f"Pattern {index}/6: {title}")
            p.echo("Current:")
            current = getattr(data, attr)
            if current:
                for i, item in enumerate(current, start=1):
                    p.echo(f"  {i}. {item}")
            else:
                p.echo("  (none)")
            p.echo()
            choice = _list_choice(p.ask(LIST_OPTIONS))
            if choice == ListReviewChoice.ADD_NEW:
                new_items = c.ask_list(prompt)
                setattr(data, attr, current + new_items)
                changes.append(f"✓ {label}: Updated (+{len(new_items)} new)")
            elif choice == ListReviewChoice.REMOVE_ALL:
                setattr(data, attr, [])
                changes.append(f"✓ {label}: Removed all")
            else:
                changes.append(f"✓ {label}: Kept")
            p.echo()

        p.header("Review Summary")
        p.echo("Changes:")
        for change in changes:
            p.echo(f"  {change}")
        p.echo()
        p.echo(
            f"Version: {data.version} → {increment_version(data.version)} "
            "(content update per @version_tracking)"
        )
        p.echo(f"Updated: {date.today().isoformat()}")
        p.echo()
        self._confirm_or_cancel("Proceed?", reason="review_declined")

        data.bump_version()
        return data

    def replace_all(self, data: ProjectIntelligence) -> ProjectIntelligence:
        """Back up both files, then start over at version 1.0."""
        p = self._prompter
        backup_dir = self._paths.new_backup_dir()
        has_navigation = self._storage.navigation_exists()

        p.header("Replace All: Preview")
        p.echo("Will BACKUP existing files to:")
        p.echo(f"  {backup_dir}/")
        p.echo(f"    ← {self._paths.document_path.name} (Version: {data.version})")
        if has_navigation:
            p.echo(f"    ← {self._paths.navigation_path.name}")
        p.echo()
        p.echo("Will DELETE and RECREATE:")
        p.echo(f"  {self._paths.document_path} (new Version: 1.0)")
        p.echo(f"  {self._paths.navigation_path}")
        p.echo()
        p.echo(f"Existing files backed up → you can restore from {backup_dir.parent}/ if needed.")
        p.echo()
        self._confirm_or_cancel("Proceed?", reason="replace_declined")

        copies = self._storage.backup(backup_dir)
        self._audit.log_backup_created(backup_dir, [c.name for c in copies])
        p.echo("✓ Backup created")
        p.echo()

        return self._collector.run_wizard()

    # -------------------------------------------------------------------------
    # Stages 4-6: render, validate, confirm and write
    # -------------------------------------------------------------------------

    def confirm_and_save(self, data: ProjectIntelligence) -> list[Path]:
        """
        Render, validate and, on confirmation, write both files.

        Raises:
            ValidationFailedError: The rendered document broke a rule
            SessionCancelled: The user declined the write
        """
        p = self._prompter
        data.updated = date.today()

        content = self._renderer.render(data)
        navigation = self._renderer.render_navigation()
        line_count = count_lines(content)

        p.header(f"Preview: {self._paths.document_path.name}")
        p.echo(content)
        p.divider()
        p.echo(f"Size: {line_count} lines")
        p.echo()

        p.header("Running validation...")
        result = self._validator.validate(content)
        p.echo(self._validator.get_user_friendly_summary(result))
        p.echo()

        if not result.is_valid:
            self._audit.log_validation_failed([
                {"rule": issue.rule, "message": issue.message}
                for issue in result.issues
            ])
            raise ValidationFailedError(result)
        self._audit.log_validation_passed(data.version, line_count)

        p.header(f"Preview: {self._paths.navigation_path.name}")
        p.echo(navigation)
        p.divider()

        p.header("Files to write")
        action = "UPDATE" if self._storage.document_exists() else "CREATE"
        p.echo(f"  {action}  {self._paths.document_path} ({line_count} lines)")
        p.echo(f"  {action}  {self._paths.navigation_path} ({count_lines(navigation)} lines)")
        p.echo()
        p.echo("Total: 2 files")
        p.echo()
        self._confirm_or_cancel(
            "Proceed?",
            reason="write_declined",
            message="Exiting. No files written.",
        )
        p.echo()

        written = self._storage.write(content, navigation)
        self._audit.log_documents_written(written, data.version)
        self._show_success(written)
        return written

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _load_existing(self) -> ProjectIntelligence:
        return parse_technical_domain(self._storage.read_document())

    def _confirm_or_cancel(
        self,
        prompt: str,
        reason: str,
        message: str = "Exiting.",
    ) -> None:
        if not self._prompter.confirm(prompt):
            self._audit.log_session_cancelled(reason)
            raise SessionCancelled(message)

    def _show_tech_stack(self, data: ProjectIntelligence) -> None:
        if data.tech_stack:
            self._prompter.echo(f"  Framework: {data.tech_stack.framework}")
            self._prompter.echo(f"  Language: {data.tech_stack.language}")
            self._prompter.echo(f"  Database: {data.tech_stack.database}")
            self._prompter.echo(f"  Styling: {data.tech_stack.styling}")
        else:
            self._prompter.echo("  (none)")

    def _show_pattern(self, pattern: Optional[str]) -> None:
        if pattern:
            self._prompter.echo("```")
            self._prompter.echo(pattern)
            self._prompter.echo("```")
        else:
            self._prompter.echo("(none)")

    def _show_existing(self, data: ProjectIntelligence) -> None:
        p = self._prompter
        p.header("Found existing project intelligence!")
        p.echo("Files found:")
        p.echo(
            f"  ✓ {self._paths.document_path.name} "
            f"(Version: {data.version}, Updated: {data.updated.isoformat()})"
        )
        if self._storage.navigation_exists():
            p.echo(f"  ✓ {self._paths.navigation_path.name}")
        p.echo()

        p.echo("Current patterns:")
        if data.tech_stack:
            p.echo(f"  📦 Tech Stack: {data.tech_stack.summary()}")
        if data.api_pattern:
            p.echo("  🔧 API: Pattern defined")
        if data.component_pattern:
            p.echo("  🎨 Component: Pattern defined")
        if data.naming:
            p.echo("  📝 Naming: Conventions defined")
        if data.standards:
            p.echo(f"  ✅ Standards: {len(data.standards)} items")
        if data.security:
            p.echo(f"  🔒 Security: {len(data.security)} items")
        p.echo()
        p.divider()

    def _show_success(self, written: list[Path]) -> None:
        p = self._prompter
        p.header("✅ Project Intelligence created successfully!")
        p.echo("Files created:")
        for path in written:
            p.echo(f"  {path}")
        p.echo()
        p.echo(f"Location: {self._paths.context_dir}")
        p.echo("Agents now use YOUR patterns automatically!")
        p.echo()

        p.header("What's next?")
        p.echo(f"1. Review: cat {self._paths.document_path}")
        p.echo("2. Update as the project evolves: add-context --update")
        p.echo("3. Share patterns across projects: add-context --global")
        p.echo()


def _scalar_choice(answer: str) -> ReviewChoice:
    """Anything unrecognised means Keep."""
    try:
        return ReviewChoice(answer)
    except ValueError:
        return ReviewChoice.KEEP


def _list_choice(answer: str) -> ListReviewChoice:
    try:
        return ListReviewChoice(answer)
    except ValueError:
        return ListReviewChoice.KEEP
