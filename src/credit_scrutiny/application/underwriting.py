"""Caller-side underwriting orchestration.

Usage example:
    from credit_scrutiny.application.underwriting import run_scrutiny
    from credit_scrutiny.domain.classification import ClassificationSelection
    from credit_scrutiny.domain.scoring import ScoringInputs

    result = run_scrutiny(
        selection=ClassificationSelection.from_record("Energy & Utilities", "", ""),
        inputs=ScoringInputs.defaults(),
        viewer_role="internal",
    )
    print(result.tier, result.guidance)
"""

from __future__ import annotations

from ..config_file import KNOWN_ROLES
from ..domain.classification import ClassificationSelection
from ..domain.scoring import ScoringInputs, ScrutinyResult, score_of
from ..domain.taxonomy import TaxonomyRegistry
from ..exceptions import ScrutinyAccessDeniedError
from ..observability.logging import get_logger
from .taxonomy_catalog import default_registry

EXTERNAL_ROLE = "external"
INTERNAL_ROLES = KNOWN_ROLES - {EXTERNAL_ROLE}

logger = get_logger("credit_scrutiny.underwriting")


def is_internal_viewer(role: str | None) -> bool:
    """Only known staff roles see underwriting data; anything else is treated as external."""
    text = (role or "").strip().lower()
    return text in INTERNAL_ROLES


def ensure_internal_viewer(role: str | None) -> None:
    """Raise unless the viewer is internal staff."""
    if not is_internal_viewer(role):
        logger.warning("Denied credit scrutiny to role %r", role)
        raise ScrutinyAccessDeniedError(role or "")


def run_scrutiny(
    *,
    selection: ClassificationSelection,
    inputs: ScoringInputs,
    viewer_role: str | None,
    registry: TaxonomyRegistry | None = None,
) -> ScrutinyResult:
    """Gate on viewer role, then score the counterparty.

    Args:
        selection: Classification as stored on the account or opportunity (may be partial).
        inputs: Underwriter-supplied risk inputs.
        viewer_role: Role of the person the result is for.
        registry: Taxonomy to score against; defaults to the bundled registry.

    Raises:
        ScrutinyAccessDeniedError: If the viewer is not internal staff.
    """
    ensure_internal_viewer(viewer_role)
    if registry is None:
        registry = default_registry()
    result = score_of(selection, inputs, registry=registry)
    match = result.taxonomy_match
    logger.info(
        "Scrutiny score %d (%s) for %s",
        result.score,
        result.tier.value,
        match.sub_industry if match is not None else "unclassified counterparty",
    )
    return result
