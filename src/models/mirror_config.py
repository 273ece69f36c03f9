"""Mirror configuration data model."""

from dataclasses import dataclass


@dataclass
class MirrorConfig:
    """Configuration for mirroring one repository directory.

    Attributes:
        owner: Repository owner (user or organisation)
        repo: Repository name
        branch: Branch to mirror
        content_dir: Repository-relative directory holding the markdown files
        sync_interval: Seconds between sync passes
        excerpt_length: Maximum excerpt length in code points
        mirror_dir: Local directory for the disk mirror
        api_base_url: GitHub API base URL
        request_timeout: Per-request timeout in seconds
        host: Address the HTTP server binds to
        port: Port the HTTP server listens on

    Example:
        >>> config = MirrorConfig(owner="octo", repo="blog")
        >>> config.repository_label
        'octo/blog@main'
    """
    owner: str
    repo: str
    branch: str = "main"
    content_dir: str = "data"
    sync_interval: int = 300
    excerpt_length: int = 140
    mirror_dir: str = ".markdown-mirror/mirror"
    api_base_url: str = "https://api.github.com"
    request_timeout: int = 30
    host: str = "127.0.0.1"
    port: int = 8080

    @property
    def repository_label(self) -> str:
        return f"{self.owner}/{self.repo}@{self.branch}"
