"""
Media Offloader - Main CLI interface

Subcommands replay media-library events (upload, variants generated,
URL lookup, delete, content render) against the configured bucket.
"""
import argparse
import sys

from colorama import init, Fore, Style

from . import __version__
from .exceptions import CredentialsUnavailable, StorageUnavailable
from .services.crypto.credential_store import CredentialStore
from .services.media_lifecycle import MediaLifecycle
from .utils.config_loader import ConfigLoader
from .utils.persistence.file_utils import (
    get_credential_file_path,
    get_data_dir,
    get_media_registry_path,
    get_settings_path,
)
from .utils.persistence.media_registry import MediaRegistry

# Initialize colorama
init(autoreset=True)

# ── Help-text epilogs for subcommands ──────────────────────────────────────

SETUP_EXAMPLES = """\
Examples:
  offloader setup
  offloader setup --verify

Creates the encryption key file (once; never overwritten).
"""

CONFIG_EXAMPLES = """\
Examples:
  offloader config
  offloader config --set '{"AWS_S3_BUCKET": "my-media", "AWS_DEFAULT_REGION": "eu-west-1"}'
  offloader config --set '{"AWS_ACCESS_KEY_ID": "AKIA...", "AWS_SECRET_ACCESS_KEY": "..."}'

Environment variables of the same name take precedence over stored values.
Access keys are stored encrypted.
"""

MEDIA_EXAMPLES = """\
Examples:
  offloader register 42 --file /srv/www/uploads/2024/05/photo-scaled.jpg --metadata meta.json
  offloader generate 42
  offloader url 42 --size thumbnail
  offloader delete 42 --yes

Workflow:
  setup → config → register → generate → url / rewrite → delete
"""

REWRITE_EXAMPLES = """\
Examples:
  offloader rewrite < post.html > post.s3.html
  offloader rewrite --block core/gallery --file block.html
"""


class Offloader:
    """Main CLI application class."""

    def __init__(self, data_dir=None, environ=None):
        """Initialize CLI application.

        Args:
            data_dir: Directory holding the key file, settings and registry
            environ: Environment mapping (defaults to ``os.environ``)
        """
        self.data_dir = data_dir or get_data_dir()
        self.store = CredentialStore(get_credential_file_path(self.data_dir))
        self.loader = ConfigLoader(self.store, get_settings_path(self.data_dir), environ)
        self.config = None
        self.registry = None
        self.lifecycle = None

    def load(self):
        """Build the configuration and the services depending on it.

        Raises:
            CredentialsUnavailable: If stored secrets cannot be decrypted
        """
        if self.config is None:
            self.config = self.loader.build_config()
            self.registry = MediaRegistry(
                get_media_registry_path(self.data_dir),
                self.config.local_base_url,
            )
            self.lifecycle = MediaLifecycle(self.config, self.registry)
        return self.config


# ── Argument Parser ────────────────────────────────────────────────────────

def create_argument_parser():
    """Create and configure the subparser-based argument parser."""
    parser = argparse.ArgumentParser(
        prog='offloader',
        description='Media Offloader — mirror a local media library into S3',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--data-dir', help='Data directory (default: $OFFLOADER_HOME or ~/.offloader)')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')
    parser.add_argument('--quiet', action='store_true', help='Only show warnings and errors')
    parser.add_argument('--log-file', help='Also append log lines to this file')

    # Shared parent so --verbose works after the subcommand name too
    _verbose_parent = argparse.ArgumentParser(add_help=False)
    _verbose_parent.add_argument('--verbose', action='store_true', default=argparse.SUPPRESS,
                                 help='Enable verbose output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # ── setup ──────────────────────────────────────────────────────────
    setup_parser = subparsers.add_parser(
        'setup',
        parents=[_verbose_parent],
        help='Create the encryption key file',
        description='Bootstrap the AES key file used for stored secrets.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=SETUP_EXAMPLES,
    )
    setup_parser.add_argument('--verify', action='store_true',
                              help='Validate configured AWS credentials with STS')

    # ── config ─────────────────────────────────────────────────────────
    config_parser = subparsers.add_parser(
        'config',
        parents=[_verbose_parent],
        help='Show or update settings',
        description='Display resolved settings or store new ones.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=CONFIG_EXAMPLES,
    )
    config_parser.add_argument('--set', help='JSON object of settings to store')

    # ── encrypt / decrypt ──────────────────────────────────────────────
    for name, help_text in (('encrypt', 'Encrypt a value with the stored key'),
                            ('decrypt', 'Decrypt a value produced by encrypt')):
        secret_parser = subparsers.add_parser(name, parents=[_verbose_parent], help=help_text)
        secret_parser.add_argument('value', help='Value to process')

    # ── upload ─────────────────────────────────────────────────────────
    upload_parser = subparsers.add_parser(
        'upload',
        parents=[_verbose_parent],
        help='Upload files to S3 (local copies are kept)',
    )
    upload_parser.add_argument('paths', nargs='+', help='Files under the local media directory')

    # ── register ───────────────────────────────────────────────────────
    register_parser = subparsers.add_parser(
        'register',
        parents=[_verbose_parent],
        help='Add an attachment to the media registry',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=MEDIA_EXAMPLES,
    )
    register_parser.add_argument('attachment_id', help='Attachment identifier')
    register_parser.add_argument('--file', required=True, help='Absolute path of the primary file')
    register_parser.add_argument('--metadata', help='JSON file with file/width/height/sizes')

    # ── generate ───────────────────────────────────────────────────────
    generate_parser = subparsers.add_parser(
        'generate',
        parents=[_verbose_parent],
        help='Offload an attachment and all its sizes',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=MEDIA_EXAMPLES,
    )
    generate_parser.add_argument('attachment_id', help='Attachment identifier')

    # ── url ────────────────────────────────────────────────────────────
    url_parser = subparsers.add_parser(
        'url',
        parents=[_verbose_parent],
        help='Print the public URL of an attachment',
    )
    url_parser.add_argument('attachment_id', help='Attachment identifier')
    url_parser.add_argument('--size', help='Size name (e.g. thumbnail, full)')

    # ── delete ─────────────────────────────────────────────────────────
    delete_parser = subparsers.add_parser(
        'delete',
        parents=[_verbose_parent],
        help='Delete an attachment from S3 and disk',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=MEDIA_EXAMPLES,
    )
    delete_parser.add_argument('attachment_id', help='Attachment identifier')
    delete_parser.add_argument('--yes', action='store_true', help='Skip confirmation')

    # ── rewrite ────────────────────────────────────────────────────────
    rewrite_parser = subparsers.add_parser(
        'rewrite',
        parents=[_verbose_parent],
        help='Rewrite local media URLs in content to remote ones',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=REWRITE_EXAMPLES,
    )
    rewrite_parser.add_argument('--block', help='Block kind (only image/gallery/cover are rewritten)')
    rewrite_parser.add_argument('--file', help='Read content from a file instead of stdin')

    return parser


# ── Main Entry Point ──────────────────────────────────────────────────────

def _handler_for(command, app, args):
    from .modes.setup_handler import SetupHandler
    from .modes.config_handler import ConfigHandler
    from .modes.secret_handler import SecretHandler
    from .modes.upload_handler import UploadHandler
    from .modes.register_handler import RegisterHandler
    from .modes.generate_handler import GenerateHandler
    from .modes.url_handler import UrlHandler
    from .modes.delete_handler import DeleteHandler
    from .modes.rewrite_handler import RewriteHandler

    handlers = {
        'setup':    SetupHandler,
        'config':   ConfigHandler,
        'encrypt':  SecretHandler,
        'decrypt':  SecretHandler,
        'upload':   UploadHandler,
        'register': RegisterHandler,
        'generate': GenerateHandler,
        'url':      UrlHandler,
        'delete':   DeleteHandler,
        'rewrite':  RewriteHandler,
    }
    return handlers[command](app, args)


# Commands that run before (or without) a resolved configuration
_LIGHTWEIGHT_COMMANDS = ('setup', 'config', 'encrypt', 'decrypt')


def main(argv=None):
    """Main CLI entry point."""
    from .utils.logger import setup_logging

    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=getattr(args, 'verbose', False), quiet=args.quiet, log_file=args.log_file)

    if args.command is None:
        parser.print_help()
        return 0

    app = Offloader(data_dir=args.data_dir)

    try:
        if args.command not in _LIGHTWEIGHT_COMMANDS:
            app.load()
        return _handler_for(args.command, app, args).execute()
    except (StorageUnavailable, CredentialsUnavailable) as e:
        print(f"{Fore.RED}[ERROR] {e}{Style.RESET_ALL}", file=sys.stderr)
        print(f"{Fore.YELLOW}[TIP] Run: offloader setup{Style.RESET_ALL}", file=sys.stderr)
        return 1
