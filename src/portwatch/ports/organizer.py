"""Grouping and ordering of classified ports."""

from collections.abc import Iterable

from portwatch.models import PortCategory, PortDetectionResult, PortGroup, PortInfo
from portwatch.ports.classifier import TypeClassifier

CATEGORY_NAMES: dict[str, str] = {
    PortCategory.DEV_SERVER.value: "Dev Servers",
    PortCategory.API.value: "APIs",
    PortCategory.DATABASE.value: "Databases",
    PortCategory.STORYBOOK.value: "Storybook",
    PortCategory.TESTING.value: "Testing",
    PortCategory.UNEXPECTED.value: "⚠️ Unexpected Ports",
    PortCategory.OTHER.value: "Other Services",
}
UNKNOWN_CATEGORY_NAME = "Other"


def get_category_name(category: str) -> str:
    """Display label for a category."""
    return CATEGORY_NAMES.get(category, UNKNOWN_CATEGORY_NAME)


def group_sort_key(group: PortGroup) -> tuple[int, str, str]:
    """Unexpected ports first, then alphabetical by label."""
    rank = 0 if group.type == PortCategory.UNEXPECTED.value else 1
    return (rank, group.name.casefold(), group.id)


class PortOrganizer:
    """Classifies ports and arranges them into display groups."""

    def __init__(self, classifier: TypeClassifier | None = None) -> None:
        self._classifier = classifier or TypeClassifier()

    @property
    def classifier(self) -> TypeClassifier:
        return self._classifier

    def categorize_port(self, port: PortInfo) -> str:
        return self._classifier.detect_type(port)

    def classify(self, ports: Iterable[PortInfo]) -> list[PortInfo]:
        """Copies of the ports with ``type`` assigned."""
        return [
            port.model_copy(update={"type": self._classifier.detect_type(port)})
            for port in ports
        ]

    def group_ports(self, ports: Iterable[PortInfo]) -> list[PortGroup]:
        """Build one group per category from already-classified ports."""
        buckets: dict[str, list[PortInfo]] = {}
        for port in ports:
            category = port.type or PortCategory.OTHER.value
            buckets.setdefault(category, []).append(port)

        groups = [
            PortGroup(
                id=f"category:{category}",
                name=get_category_name(category),
                type=category,
                ports=sorted(members, key=lambda p: p.port),
            )
            for category, members in buckets.items()
        ]
        groups.sort(key=group_sort_key)
        return groups

    def process_ports(self, ports: Iterable[PortInfo]) -> PortDetectionResult:
        """Classify and group a detection pass."""
        classified = self.classify(ports)
        return PortDetectionResult(
            ports=classified,
            groups=self.group_ports(classified),
        )
