"""One module per command-line script; each exposes ``run()``."""
