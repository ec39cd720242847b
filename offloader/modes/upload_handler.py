"""Handler for the 'upload' subcommand.

Usage:
    offloader upload /srv/www/uploads/2024/05/photo.jpg [...]
"""
import os

from colorama import Fore, Style

from .base_handler import ModeHandler


class UploadHandler(ModeHandler):
    """Handles ``offloader upload PATH...`` — the "file uploaded" event.

    Local copies are kept; use ``offloader generate`` to offload an
    attachment and reclaim its local storage.
    """

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ S3 Upload{Style.RESET_ALL}\n")

    def validate_prerequisites(self) -> bool:
        return self.require_remote()

    def prepare_context(self):
        paths = [os.path.abspath(p) for p in self.args.paths]
        missing = [p for p in paths if not os.path.isfile(p)]
        for path in missing:
            print(f"{Fore.YELLOW}[WARNING] Not a file, skipping: {path}{Style.RESET_ALL}")
        return {"paths": [p for p in paths if p not in missing]}

    def execute_workflow(self, context):
        paths = context["paths"]
        if not paths:
            print(f"{Fore.RED}[ERROR] Nothing to upload{Style.RESET_ALL}")
            return False

        uploaded = self.lifecycle.syncer.upload_many(paths)

        print(f"\n  Uploaded {uploaded} of {len(paths)} file(s)")
        return uploaded == len(paths)
