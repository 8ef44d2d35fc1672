"""Artivault: ledger-backed artifact records with an owner-issued permission matrix.

  - Sequence-allocated, owner-bound artifact records (primary + redundant keyspaces)
  - Time-bounded, tiered permission grants keyed by (artifact, grantee)
  - Block-height clocks, pluggable memory / SQLite state backends
  - Hash-chained operation journal for tamper-evident auditing
"""

__version__ = "0.1.0"
__description__ = "Ledger-backed artifact record store with tiered, time-bounded grants"

from artivault.core.vault import Vault
from artivault.models.results import ErrorKind, OperationResult
from artivault.cli.app import app as cli

__all__ = ["Vault", "ErrorKind", "OperationResult", "cli", "__version__"]
