"""Machine bootstrap: target resolution, provisioning phases and linking.

Modules
-------
- ``app_runner``: CLI parsing, logging setup and the entry point.
- ``target``: resolves the account being provisioned.
- ``commands``: logged, best-effort external command execution.
- ``provision``, ``toolchain``, ``fonts``: the package, tool and font phases.
- ``linker``, ``gitconfig``: idempotent dotfile links and the templated
  git identity.
- ``pipeline``: phase sequencing and the run report.
- ``ui``: terminal output and prompt providers.
"""
