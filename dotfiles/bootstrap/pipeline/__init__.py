"""Package boundary for run orchestration.

Holds the orchestrator that sequences the phases and the status helpers
(step results, run report, summary table). The package itself is
intentionally empty.

Typical usage::

    from dotfiles.bootstrap.pipeline import orchestrator

"""
