"""Select the registries that are authoritative for one query.

A registry either does not recognize the query, recognizes it, or claims to be
its exclusive provider. One exclusive claimant wins over any number of
recognizing registries; two or more claimants are a configuration error.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from extcat.domain.errors import ExclusiveProviderConflictError
from extcat.domain.model import Classification

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from extcat.domain.model import ArtifactCoords
    from extcat.domain.ports import RegistryEndpoint

log = getLogger(__name__)


def filter_endpoints[E: RegistryEndpoint](
    endpoints: Sequence[E],
    classify: Callable[[E], Classification],
    *,
    subject: str,
) -> tuple[E, ...]:
    """Return the endpoints authoritative for ``subject``, in configured order.

    Raises ``ExclusiveProviderConflictError`` naming every exclusive claimant, in
    configured order, when more than one endpoint claims exclusivity.
    """

    recognized: list[E] = []
    claimants: list[E] = []
    for endpoint in endpoints:
        match classify(endpoint):
            case Classification.NOT_RECOGNIZED:
                log.debug("Registry %s does not recognize %s", endpoint.id, subject)
            case Classification.RECOGNIZED:
                recognized.append(endpoint)
            case Classification.EXCLUSIVE_PROVIDER:
                claimants.append(endpoint)

    if len(claimants) > 1:
        raise ExclusiveProviderConflictError(
            [endpoint.id for endpoint in claimants],
            subject=subject,
        )
    if claimants:
        return (claimants[0],)
    return tuple(recognized)


def platform_subject(bom: ArtifactCoords) -> str:
    return f"the {bom} platform"


def runtime_version_subject(version: str) -> str:
    return f"extensions based on runtime core version {version}"
