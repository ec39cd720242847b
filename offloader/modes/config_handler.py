"""Handler for the 'config' subcommand.

Shows where each setting comes from, or saves new values with
``--set '<json>'``.
"""
from colorama import Fore, Style

from ..utils.config_loader import handle_config_update
from .base_handler import ModeHandler

_SOURCE_COLOURS = {
    'env': Fore.GREEN,
    'settings': Fore.CYAN,
    'default': Fore.WHITE,
}


class ConfigHandler(ModeHandler):
    """Handles ``offloader config [--set JSON]``."""

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ Configuration{Style.RESET_ALL}\n")

    def validate_prerequisites(self) -> bool:
        if not self.app.store.exists():
            print(f"{Fore.RED}[ERROR] Key file missing: {self.app.store.key_file}{Style.RESET_ALL}")
            print(f"{Fore.YELLOW}[TIP] Run: offloader setup{Style.RESET_ALL}")
            return False
        return True

    def execute_workflow(self, context):
        updates = getattr(self.args, 'set', None)
        if updates:
            return handle_config_update(updates, self.app.loader) == 0

        for key, info in self.app.loader.describe_settings().items():
            colour = _SOURCE_COLOURS.get(info['source'], '')
            value = info['value'] or '-'
            print(f"  {key:<28} {value:<48} {colour}[{info['source']}]{Style.RESET_ALL}")

        config = self.app.load()
        mode = "S3 offload" if config.is_remote_configured else "local-only"
        print(f"\n  Mode           : {mode}")
        print(f"  Remote base URL: {config.remote_base_url}")
        return True

    def display_completion(self, result):
        print()
