"""depclosure exception hierarchy.

All public exceptions inherit from DepClosureError, giving callers a single
base class to catch when they want to handle any depclosure-specific failure
without swallowing unrelated errors.

Only ``ConflictError`` and ``UnknownDependencyError`` belong to the contract
of the resolution core. The remaining kinds are raised by the integration
layer (registry adapters, deadline wrapper, catalogue loading).
"""

from __future__ import annotations


class DepClosureError(Exception):
    """Base exception for all depclosure errors."""


class ResolutionError(DepClosureError):
    """Raised when a dependency closure cannot be validated.

    Base class of the two failure kinds the resolution core reports.
    Both are recoverable input-validation feedback, not defects.
    """


class ConflictError(ResolutionError):
    """Raised when the compatibility policy rejects a package's version set.

    Attributes:
        package_name: The package whose requested versions clash.
        versions: Every version requested for the package so far, including
            the one whose insertion was rejected.
    """

    def __init__(self, package_name: str, versions: frozenset[str]) -> None:
        self.package_name = package_name
        self.versions = frozenset(versions)
        listed = ", ".join(sorted(self.versions))
        super().__init__(
            f"Incompatible dependencies: {package_name} requested at "
            f"versions {{{listed}}}"
        )


class UnknownDependencyError(ResolutionError):
    """Raised when the registry has no build record for a requirement.

    Indicates a typo, an unpublished version, or a missing
    architecture-specific build.
    """

    def __init__(self, package_name: str, version: str, architecture: str) -> None:
        self.package_name = package_name
        self.version = version
        self.architecture = architecture
        super().__init__(
            f"Unknown dependency {package_name} {version} "
            f"(architecture {architecture!r})"
        )


class LookupUnavailableError(DepClosureError):
    """Raised when a registry adapter cannot reach its backing service.

    Covers timeouts, connection failures, unexpected HTTP statuses and
    undecodable payloads. Distinct from ``UnknownDependencyError``: the
    record may well exist, the registry just could not answer.
    """

    def __init__(
        self,
        package_name: str,
        version: str,
        architecture: str | None,
        reason: str,
    ) -> None:
        self.package_name = package_name
        self.version = version
        self.architecture = architecture
        self.reason = reason
        target = f"{package_name} {version}"
        if architecture is not None:
            target += f" ({architecture})"
        super().__init__(f"Registry lookup for {target} unavailable: {reason}")


class ResolutionTimeoutError(DepClosureError):
    """Raised when a resolution does not finish within its deadline."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Resolution did not complete within {timeout:g}s")


class RegistryFormatError(DepClosureError):
    """Raised for malformed registry catalogues or payloads.

    Covers unreadable files, unsupported extensions, and build entries
    missing required fields.
    """
