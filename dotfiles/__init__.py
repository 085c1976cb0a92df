"""Dotfiles bootstrap package.

This package provisions a Fedora workstation for a single user and links the
configuration files tracked in this repository into that user's home
directory. It is driven by the launcher (``install.py``) or the
``dotfiles-bootstrap`` console script.

Package Structure
-----------------
- `bootstrap/`:
    Target resolution, command running, the four provisioning phases
    (packages, tools, fonts, links), interactive prompts and the run
    orchestrator with its summary report.
- `config.py`: All configuration constants (paths, package lists, URLs,
  link mappings), as UPPER_SNAKE_CASE.
- `exceptions.py`: Project-specific exception classes.

Examples
--------
>>> import dotfiles
>>> # See dotfiles.bootstrap.app_runner for the entrypoint.

"""
