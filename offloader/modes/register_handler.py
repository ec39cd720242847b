"""Handler for the 'register' subcommand.

Adds an attachment to the JSON media registry so that the other
commands can look it up by id.
"""
import os

from colorama import Fore, Style

from ..utils.persistence.file_utils import load_json
from .base_handler import ModeHandler


class RegisterHandler(ModeHandler):
    """Handles ``offloader register ID --file PATH [--metadata FILE]``."""

    def display_banner(self):
        print(f"\n{Fore.CYAN}  ▸ Register Attachment{Style.RESET_ALL}\n")

    def prepare_context(self):
        attached_file = os.path.abspath(self.args.file)
        translator = self.lifecycle.translator

        if not translator.is_in_scope(attached_file):
            print(f"{Fore.RED}[ERROR] {attached_file} is not under "
                  f"{self.config.local_base_dir or '(no OFFLOADER_LOCAL_BASE_DIR set)'}{Style.RESET_ALL}")
            return None

        metadata = {}
        if self.args.metadata:
            metadata = load_json(self.args.metadata)
            if not isinstance(metadata, dict):
                print(f"{Fore.RED}[ERROR] Could not read metadata from {self.args.metadata}{Style.RESET_ALL}")
                return None

        metadata.setdefault("file", translator.to_object_key(attached_file))
        metadata.setdefault("sizes", {})
        return {"attached_file": attached_file, "metadata": metadata}

    def execute_workflow(self, context):
        registry = self.app.registry
        ok = registry.register(self.args.attachment_id, context["attached_file"], context["metadata"])
        if not ok:
            print(f"{Fore.RED}[ERROR] Failed to save {registry.registry_path}{Style.RESET_ALL}")
            return False

        sizes = context["metadata"]["sizes"]
        print(f"  Attachment : {self.args.attachment_id}")
        print(f"  File       : {context['metadata']['file']}")
        print(f"  Sizes      : {len(sizes)}")
        return True
