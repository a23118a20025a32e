"""Starter .patchmode.toml template."""

DEFAULT_TOML = """\
# patchmode configuration
version = "1.0"

[resolve]
filesystem_fallback = true   # stat the working tree when the patch carries no mode

[output]
format = "terminal"          # terminal | json | yaml
show_summary = true
"""
