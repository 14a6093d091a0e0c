"""Link extraction and domain rewriting (core domain)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class DomainRule:
    """A recognized domain and the front-end domain it is rewritten to."""

    domain: str
    replacement: str


# Order matters: the first rule whose domain appears in a URL wins.
DOMAIN_RULES = (
    DomainRule(domain="twitter.com", replacement="fxtwitter.com"),
    DomainRule(domain="x.com", replacement="fixvx.com"),
)

HTTPS_MARKER = "https://"


def _strip_replacements(token: str) -> str:
    # fxtwitter.com and fixvx.com contain twitter.com and x.com respectively.
    for rule in DOMAIN_RULES:
        token = token.replace(rule.replacement, "")
    return token


def _is_candidate(token: str) -> bool:
    remainder = _strip_replacements(token)
    return any(rule.domain in remainder for rule in DOMAIN_RULES)


def has_link_candidates(text: str) -> bool:
    """Cheap pre-filter: an https link and a recognized domain somewhere in the text."""

    if HTTPS_MARKER not in text:
        return False
    return any(rule.domain in text for rule in DOMAIN_RULES)


def extract_urls(message: str) -> List[str]:
    """Return the whitespace-delimited tokens that reference a recognized domain.

    Matching is plain substring containment on each token, so punctuation glued
    to a link stays part of it. Order and duplicates are preserved.
    """

    return [token for token in message.split() if _is_candidate(token)]


def match_rule(url: str) -> Optional[DomainRule]:
    """Return the first rule whose domain appears in the URL, if any."""

    for rule in DOMAIN_RULES:
        if rule.domain in url:
            return rule
    return None


def rewrite_urls(urls: Iterable[str]) -> str:
    """Rewrite recognized domains and join the results into one block.

    Every rewritten URL is followed by a newline. URLs that match no rule
    contribute nothing, so an input without recognized links yields "".
    """

    lines: List[str] = []
    for url in urls:
        rule = match_rule(url)
        if rule is None:
            continue
        lines.append(url.replace(rule.domain, rule.replacement) + "\n")
    return "".join(lines)
