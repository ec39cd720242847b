"""Mode handlers for the offloader CLI.

Subcommand handlers:
  - SetupHandler     → offloader setup
  - ConfigHandler    → offloader config
  - SecretHandler    → offloader encrypt / decrypt
  - UploadHandler    → offloader upload
  - RegisterHandler  → offloader register
  - GenerateHandler  → offloader generate
  - UrlHandler       → offloader url
  - DeleteHandler    → offloader delete
  - RewriteHandler   → offloader rewrite
"""
from .base_handler import ModeHandler
