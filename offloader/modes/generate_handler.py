"""Handler for the 'generate' subcommand.

Replays the "variants generated" event for a registered attachment:
every file is uploaded, its local copy deleted and empty folders removed.
"""
from colorama import Fore, Style

from .base_handler import ModeHandler


class GenerateHandler(ModeHandler):
    """Handles ``offloader generate ID``."""

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ Offload Attachment{Style.RESET_ALL}\n")

    def validate_prerequisites(self) -> bool:
        return self.require_remote()

    def prepare_context(self):
        asset = self.app.registry.get_metadata(self.args.attachment_id)
        if not asset:
            print(f"{Fore.RED}[ERROR] Unknown attachment: {self.args.attachment_id}{Style.RESET_ALL}")
            print(f"{Fore.YELLOW}[TIP] Run: offloader register {self.args.attachment_id} "
                  f"--file <path>{Style.RESET_ALL}")
            return None
        return {"metadata": asset.to_dict()}

    def execute_workflow(self, context):
        self.lifecycle.on_variants_generated(context["metadata"], self.args.attachment_id)
        url = self.lifecycle.public_url(self.args.attachment_id)
        if url:
            print(f"  Public URL : {url}")
        return True
