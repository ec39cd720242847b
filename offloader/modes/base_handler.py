"""Base mode handler with template method pattern."""
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
from colorama import Fore, Style


class ModeHandler(ABC):
    """Abstract base class for all subcommand handlers."""

    def __init__(self, app, args=None):
        """Initialize mode handler with the Offloader application.

        Args:
            app: Main Offloader instance with store, loader, config, lifecycle
            args: Parsed command-line arguments
        """
        self.app = app
        self.args = args
        self.config = app.config
        self.lifecycle = app.lifecycle

    def execute(self) -> int:
        """Execute mode workflow (Template Method).

        Returns:
            Exit code (0 for success, 1 for failure)
        """
        self.display_banner()

        if not self.validate_prerequisites():
            return 1

        context = self.prepare_context()
        if context is None:
            return 1

        result = self.execute_workflow(context)

        if result:
            self.display_completion(result)

        return 0 if result else 1

    @abstractmethod
    def display_banner(self):
        """Display mode-specific banner."""
        pass

    def validate_prerequisites(self) -> bool:
        """Validate prerequisites for this mode.

        Returns:
            True if prerequisites are met, False otherwise
        """
        return True

    def prepare_context(self) -> Optional[Dict[str, Any]]:
        """Prepare execution context.

        Returns:
            Context dictionary with required data, or None if preparation failed
        """
        return {}

    @abstractmethod
    def execute_workflow(self, context: Dict[str, Any]) -> Any:
        """Execute mode-specific workflow.

        Args:
            context: Prepared context dictionary

        Returns:
            Result object (mode-specific), or None/False if failed
        """
        pass

    def display_completion(self, result: Any):
        """Display completion message. Override for custom display."""
        print(f"\n{Fore.GREEN}[SUCCESS] Done{Style.RESET_ALL}\n")

    def require_remote(self) -> bool:
        """Check that S3 offloading is configured, printing a tip if not."""
        if self.lifecycle and self.lifecycle.enabled:
            return True
        print(f"{Fore.RED}[ERROR] S3 offloading not configured (local-only mode){Style.RESET_ALL}")
        print(f"{Fore.YELLOW}[TIP] Run: offloader config --set "
              f"'{{\"AWS_S3_BUCKET\": \"...\"}}'{Style.RESET_ALL}")
        return False
