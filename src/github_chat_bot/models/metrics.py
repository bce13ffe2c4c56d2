from enum import Enum


class MetricKind(str, Enum):
    STARS = "stars"
    FORKS = "forks"

    @property
    def label(self) -> str:
        return METRIC_LABELS[self]

    @property
    def unit(self) -> str:
        return self.value


METRIC_LABELS: dict[MetricKind, str] = {
    MetricKind.STARS: "Stars ⭐",
    MetricKind.FORKS: "Forks",
}
