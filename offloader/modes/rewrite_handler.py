"""Handler for the 'rewrite' subcommand.

Reads rendered content on stdin (or ``--file``) and writes it back with
local media URLs replaced by remote ones. Nothing but the content is
written to stdout.
"""
import sys

from colorama import Fore, Style

from .base_handler import ModeHandler


class RewriteHandler(ModeHandler):
    """Handles ``offloader rewrite [--block KIND] [--file PATH]``."""

    def display_banner(self):
        pass

    def prepare_context(self):
        source = getattr(self.args, 'file', None)
        if not source:
            return {"content": sys.stdin.read()}

        try:
            with open(source, 'r', encoding='utf-8') as f:
                return {"content": f.read()}
        except OSError as e:
            print(f"{Fore.RED}[ERROR] Cannot read {source}: {e}{Style.RESET_ALL}", file=sys.stderr)
            return None

    def execute_workflow(self, context):
        block = getattr(self.args, 'block', None)
        if block:
            output = self.lifecycle.on_block_rendered(context["content"], block)
        else:
            output = self.lifecycle.on_content_rendered(context["content"])

        sys.stdout.write(output)
        return True

    def display_completion(self, result):
        pass
