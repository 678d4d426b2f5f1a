"""
Derived external links for a company: logo image and support resources.

Resource links are heuristic guesses built from the company's site origin and
a fixed candidate path per intent. They are never checked for reachability.
"""

from typing import Dict, List, Optional, Sequence
from urllib.parse import urlparse

from saas_atlas.core.models import Company, ResourceLink


DEFAULT_LOGO_SERVICE = "logo.clearbit.com"

# Candidate paths per intent, most likely first
RESOURCE_PATHS: Dict[str, List[str]] = {
    'knowledge_base': ['/docs', '/help', '/support', '/kb'],
    'community': ['/community', '/forum', '/forums'],
    'academy': ['/academy', '/learn', '/training'],
    'developer_docs': ['/developers', '/api', '/docs/api'],
    'support_contact': ['/contact', '/support/contact', '/contact-us'],
}

RESOURCE_LABELS: Dict[str, str] = {
    'knowledge_base': 'Knowledge Base',
    'community': 'Community Forum',
    'academy': 'Academy',
    'developer_docs': 'Developer Docs',
    'support_contact': 'Contact Support',
}


def _host(docs_url: Optional[str]):
    """Parsed URL and lower-cased host without leading "www.", or (None, None)."""
    if not docs_url:
        return None, None

    try:
        parsed = urlparse(docs_url.strip())
        host = parsed.hostname
    except (ValueError, AttributeError):
        return None, None

    if not host:
        return None, None
    if host.startswith('www.'):
        host = host[4:]
    return parsed, host or None


def logo_domain(docs_url: Optional[str]) -> Optional[str]:
    """
    Extract the bare domain used to look up a logo.

    Args:
        docs_url: Absolute URL of the company's documentation

    Returns:
        Lower-cased host without scheme, port or leading "www.", or None
        if the URL has no host
    """
    return _host(docs_url)[1]


def logo_url(docs_url: Optional[str], service: str = DEFAULT_LOGO_SERVICE) -> Optional[str]:
    """Build the logo image URL for a company, or None without a domain."""
    domain = logo_domain(docs_url)
    if domain is None:
        return None
    return f"https://{service}/{domain}"


def site_origin(docs_url: Optional[str]) -> Optional[str]:
    """
    Origin used as the base of derived resource links.

    "https://www.example.com/help" -> "https://example.com"
    "http://localhost:8080/help" -> "http://localhost:8080"
    """
    parsed, host = _host(docs_url)
    if host is None:
        return None

    if ':' in host:
        host = f"[{host}]"
    try:
        port = parsed.port
    except ValueError:
        port = None
    if port is not None:
        host = f"{host}:{port}"

    scheme = parsed.scheme.lower() or 'https'
    return f"{scheme}://{host}"


class LinkBuilder:
    """Build logo and resource links from configurable heuristics."""

    def __init__(self, logo_service: str = DEFAULT_LOGO_SERVICE,
                 resource_paths: Optional[Dict[str, Sequence[str]]] = None):
        """
        Initialize the link builder.

        Args:
            logo_service: Host of the third-party logo service
            resource_paths: Ordered candidate paths per intent
        """
        self.logo_service = logo_service
        self.resource_paths = {
            intent: list(paths)
            for intent, paths in (resource_paths or RESOURCE_PATHS).items()
        }

    @property
    def intents(self) -> List[str]:
        """Known resource intents, in presentation order."""
        return list(self.resource_paths)

    def logo_url(self, docs_url: Optional[str]) -> Optional[str]:
        return logo_url(docs_url, self.logo_service)

    def resource_url(self, company: Company, intent: str) -> Optional[str]:
        """
        Guess the URL of one resource category for a company.

        Raises:
            KeyError: If the intent is unknown
        """
        candidates = self.resource_paths[intent]
        origin = site_origin(company.docs_url)
        if origin is None or not candidates:
            return None
        return origin + candidates[0]

    def resource_links(self, company: Company, intents: Optional[Sequence[str]] = None) -> List[ResourceLink]:
        """
        Build resource links for a company.

        Args:
            company: Company to build links for
            intents: Restrict to these intents (default: all)

        Returns:
            ResourceLink list, empty when docs_url has no usable host
        """
        links = []
        for intent in intents if intents is not None else self.intents:
            url = self.resource_url(company, intent)
            if url is None:
                continue
            label = RESOURCE_LABELS.get(intent, intent.replace('_', ' ').title())
            links.append(ResourceLink(intent=intent, label=label, url=url))
        return links
