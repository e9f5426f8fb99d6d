"""Options and results for add-on runs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from cluster_addons.services.addons.exceptions import MissingOptionError

DEFAULT_FLAGGER_NAMESPACE = "istio-system"
DEFAULT_FLAGGER_RELEASE = "flagger"
DEFAULT_FLAGGER_CHART = "flagger/flagger"
DEFAULT_FLAGGER_GRAFANA_CHART = "flagger/grafana"
DEFAULT_FLAGGER_REPO_URL = "https://flagger.app"
DEFAULT_FLAGGER_REPO_NAME = "flagger"
DEFAULT_PRODUCTION_ENVIRONMENT = "production"
DEFAULT_ISTIO_GATEWAY = "jx-gateway"
DEFAULT_DEV_NAMESPACE = "jx"

GRAFANA_RELEASE_SUFFIX = "-grafana"


def parse_set_values(raw: str) -> list[str]:
    """Split a comma-separated ``key=value`` string into ``--set`` overrides.

    Empty tokens are dropped.

    Example:
        >>> parse_set_values("a=1, b=2,")
        ['a=1', 'b=2']
    """
    return [token.strip() for token in raw.split(",") if token.strip()]


def grafana_release_name(release_name: str) -> str:
    """Release name of the Grafana dashboard chart paired with ``release_name``."""
    return f"{release_name}{GRAFANA_RELEASE_SUFFIX}"


class FlaggerAddonOptions(BaseModel):
    """Options for installing Flagger."""

    model_config = ConfigDict(frozen=True)

    namespace: str = DEFAULT_FLAGGER_NAMESPACE
    release_name: str = DEFAULT_FLAGGER_RELEASE
    version: str = ""
    chart: str = DEFAULT_FLAGGER_CHART
    grafana_chart: str = DEFAULT_FLAGGER_GRAFANA_CHART
    set_values: str = ""
    values_files: list[str] = Field(default_factory=list)
    helm_update: bool = True
    production_environment: str = DEFAULT_PRODUCTION_ENVIRONMENT
    istio_gateway: str = DEFAULT_ISTIO_GATEWAY
    dev_namespace: str = DEFAULT_DEV_NAMESPACE
    repo_url: str = DEFAULT_FLAGGER_REPO_URL
    repo_name: str = DEFAULT_FLAGGER_REPO_NAME

    def validate_required(self) -> None:
        """Check the options that have no usable empty value.

        Raises:
            MissingOptionError: For the first of release, chart and grafana
                chart that is empty.
        """
        if not self.release_name:
            raise MissingOptionError("release")
        if not self.chart:
            raise MissingOptionError("chart")
        if not self.grafana_chart:
            raise MissingOptionError("grafana-chart")


class FlaggerRemoveOptions(BaseModel):
    """Options for removing Flagger."""

    model_config = ConfigDict(frozen=True)

    namespace: str = DEFAULT_FLAGGER_NAMESPACE
    release_name: str = DEFAULT_FLAGGER_RELEASE
    production_environment: str = DEFAULT_PRODUCTION_ENVIRONMENT
    dev_namespace: str = DEFAULT_DEV_NAMESPACE
    purge: bool = False

    def validate_required(self) -> None:
        """Raises MissingOptionError if the release name is empty."""
        if not self.release_name:
            raise MissingOptionError("release")


class FlaggerInstallResult(BaseModel):
    """What an install run did."""

    namespace: str
    repo_name: str
    releases: list[str] = Field(default_factory=list)
    istio_namespace: str | None = None
    gateway: str | None = None
    gateway_created: bool = False


class FlaggerRemoveResult(BaseModel):
    """What a removal run did."""

    namespace: str
    releases: list[str] = Field(default_factory=list)
    istio_namespace: str | None = None
