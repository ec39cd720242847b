"""Handler for the 'delete' subcommand.

Deletes an attachment's objects from S3 and its local files after user
confirmation, then drops it from the registry.
"""
from colorama import Fore, Style

from .base_handler import ModeHandler


class DeleteHandler(ModeHandler):
    """Handles ``offloader delete ID [--yes]`` — the "asset deleted" event."""

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ Delete Attachment{Style.RESET_ALL}\n")

    def validate_prerequisites(self) -> bool:
        return self.require_remote()

    def prepare_context(self):
        asset = self.app.registry.get_metadata(self.args.attachment_id)
        if not asset:
            print(f"{Fore.RED}[ERROR] Unknown attachment: {self.args.attachment_id}{Style.RESET_ALL}")
            return None
        return {"asset": asset}

    def execute_workflow(self, context):
        asset = context["asset"]
        paths = asset.variant_paths()

        print(f"  Attachment: {Fore.WHITE}{asset.attachment_id}{Style.RESET_ALL}")
        for path in paths:
            print(f"    {path}")
        print()

        if not getattr(self.args, 'yes', False):
            try:
                answer = input(
                    f"{Fore.YELLOW}Delete these {len(paths)} object(s) from S3 and disk? "
                    f"[y/N]: {Style.RESET_ALL}"
                ).strip().lower()
            except (EOFError, KeyboardInterrupt):
                print()
                answer = ""

            if answer not in ("y", "yes"):
                print(f"\n{Fore.CYAN}Cancelled — no changes made.{Style.RESET_ALL}")
                return False

        deleted = self.lifecycle.on_asset_deleted(asset.attachment_id)
        self.app.registry.unregister(asset.attachment_id)

        print(f"\n  Deleted {deleted} of {len(paths)} object(s) from S3")
        return True
