"""Handler for the 'url' subcommand."""
from colorama import Fore, Style

from .base_handler import ModeHandler


class UrlHandler(ModeHandler):
    """Handles ``offloader url ID [--size NAME]`` — print the public URL."""

    def display_banner(self):
        pass

    def execute_workflow(self, context):
        attachment_id = self.args.attachment_id
        size = getattr(self.args, 'size', None)

        if size:
            image = self.lifecycle.image_downsize(attachment_id, size)
            url = image[0] if image else None
        else:
            url = self.lifecycle.public_url(attachment_id)

        if not url:
            print(f"{Fore.RED}[ERROR] No remote URL for attachment {attachment_id}"
                  f"{f' at size {size}' if size else ''}{Style.RESET_ALL}")
            return False

        print(url)
        return True

    def display_completion(self, result):
        pass
