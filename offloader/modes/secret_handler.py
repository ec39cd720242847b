"""Handler for the 'encrypt' and 'decrypt' subcommands."""
import sys

from colorama import Fore, Style

from ..exceptions import CredentialsUnavailable
from .base_handler import ModeHandler


class SecretHandler(ModeHandler):
    """Handles ``offloader encrypt VALUE`` and ``offloader decrypt VALUE``.

    The result goes to stdout alone so it can be captured by scripts.
    """

    def display_banner(self):
        pass

    def execute_workflow(self, context):
        store = self.app.store
        value = self.args.value

        try:
            if self.args.command == 'encrypt':
                result = store.encrypt(value)
            else:
                result = store.decrypt(value)
        except CredentialsUnavailable as e:
            print(f"{Fore.RED}[ERROR] {e}{Style.RESET_ALL}", file=sys.stderr)
            print(f"{Fore.YELLOW}[TIP] Run: offloader setup{Style.RESET_ALL}", file=sys.stderr)
            return False

        if result is None:
            print(f"{Fore.RED}[ERROR] Value is not a valid ciphertext for this key{Style.RESET_ALL}",
                  file=sys.stderr)
            return False

        print(result)
        return True

    def display_completion(self, result):
        pass
