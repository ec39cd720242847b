"""Handler for the 'setup' subcommand.

Creates the encryption key file (once) and optionally validates the
configured AWS credentials against STS.
"""
from colorama import Fore, Style

from ..exceptions import StorageUnavailable
from .base_handler import ModeHandler


class SetupHandler(ModeHandler):
    """Handles ``offloader setup [--verify]``."""

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ Setup{Style.RESET_ALL}\n")

    def execute_workflow(self, context):
        store = self.app.store

        try:
            created = store.bootstrap()
        except StorageUnavailable as e:
            print(f"{Fore.RED}[ERROR] {e}{Style.RESET_ALL}")
            return False

        if created:
            print(f"  Key file : {Fore.GREEN}created{Style.RESET_ALL} {store.key_file}")
        else:
            print(f"  Key file : already present {store.key_file}")

        if getattr(self.args, 'verify', False):
            return self._verify()

        return True

    def _verify(self):
        from ..utils.aws.aws_utils import verify_credentials

        config = self.app.load()
        if not config.has_credentials:
            print(f"{Fore.YELLOW}[WARNING] No AWS credentials configured - local-only mode{Style.RESET_ALL}")
            return True

        ok, detail = verify_credentials(config)
        if not ok:
            print(f"{Fore.RED}[ERROR] AWS credentials rejected: {detail}{Style.RESET_ALL}")
            return False

        print(f"  AWS      : {Fore.GREEN}credentials valid{Style.RESET_ALL} (account {detail})")
        return True
