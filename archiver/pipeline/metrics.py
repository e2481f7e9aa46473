from dataclasses import dataclass, field


@dataclass
class ArchiveResult:
    """Outcome of partitioning one site's upcoming shows."""
    site_name: str
    file_path: str
    original_upcoming: int = 0
    original_past: int = 0
    archived: int = 0
    remaining: int = 0
    total_past: int = 0
    archived_shows: list = field(default_factory=list)
    unparsed_shows: list = field(default_factory=list)
    warnings: list = field(default_factory=list)
    errors: list = field(default_factory=list)
    written: bool = False


@dataclass
class SiteMetrics:
    """Track run metrics for each site."""
    name: str
    mode: str
    archived: int = 0
    remaining: int = 0
    errors: int = 0
    error_messages: list = field(default_factory=list)
    duration_ms: float = 0.0
