"""Production configuration guard — enforces hard constraints in production.

The guard runs once when a vault is built from configuration and fails
hard (raises ``ProductionConfigError``) if any constraint is violated.
Other code should not scatter ``if is_production`` checks.
"""

from __future__ import annotations

import logging

from artivault.config import VaultConfig

logger = logging.getLogger(__name__)


class ProductionConfigError(RuntimeError):
    """Raised when production configuration constraints are violated.

    The vault cannot safely start in production mode with the current
    configuration.  It must not be caught and ignored.
    """


def enforce_production_constraints(config: VaultConfig) -> None:
    """Validate all production-critical configuration constraints.

    Constraints enforced
    --------------------
    1. Debug mode must be disabled.
    2. State must be persistent (``backend="sqlite"``).
    3. Integrity hashes must be hexadecimal digests.
    4. The operation journal must be enabled.

    Raises
    ------
    ProductionConfigError
        If any production constraint is violated; all violations are
        reported in one message.
    """
    if not config.is_production:
        return

    violations: list[str] = []

    if config.debug:
        violations.append(
            "debug=True is not allowed in production. Set ARTIVAULT_DEBUG=false."
        )
    if config.backend != "sqlite":
        violations.append(
            f"backend={config.backend!r} is volatile. Set ARTIVAULT_BACKEND=sqlite."
        )
    if not config.require_hex_hash:
        violations.append(
            "Hex digest validation is required in production. "
            "Set ARTIVAULT_REQUIRE_HEX_HASH=true."
        )
    if not config.journal_enabled:
        violations.append(
            "The operation journal cannot be disabled in production. "
            "Set ARTIVAULT_JOURNAL_ENABLED=true."
        )

    if violations:
        msg = (
            "Production configuration guard failed.\n"
            + "\n".join(f"  - {v}" for v in violations)
        )
        logger.critical(msg)
        raise ProductionConfigError(msg)

    logger.info("Production configuration guard passed.")
