from typing import List, Tuple

from bs4 import BeautifulSoup

from pageaudit.schemas.report import SecurityFinding
from pageaudit.services.extractors.base import BaseExtractor, ExtractionContext

INLINE_SCRIPT_THRESHOLD = 5


def _has_csp_meta(soup: BeautifulSoup) -> bool:
    return any(
        (meta.get("http-equiv") or "").lower() == "content-security-policy"
        for meta in soup.find_all("meta")
    )


def check_security(
    soup: BeautifulSoup, html: str, inline_script_threshold: int = INLINE_SCRIPT_THRESHOLD
) -> List[SecurityFinding]:
    """
    Flag client-side security smells visible in the document.

    Args:
        soup: Parsed document
        html: Raw serialized document
        inline_script_threshold: Inline script count tolerated before reporting

    Returns:
        Findings in check order
    """
    findings = []

    if not _has_csp_meta(soup):
        findings.append(
            SecurityFinding(severity="warning", message="No Content Security Policy detected")
        )

    http_resources = html.count("http://")
    if http_resources > 0:
        findings.append(
            SecurityFinding(
                severity="warning",
                message=f"{http_resources} HTTP resources (should use HTTPS)",
            )
        )

    scripts = soup.find_all("script")
    external_scripts = sum(
        1
        for script in scripts
        if (script.get("src") or "").startswith(("http://", "https://"))
    )
    if external_scripts > 0:
        findings.append(
            SecurityFinding(severity="info", message=f"{external_scripts} external scripts loaded")
        )

    inline_scripts = sum(1 for script in scripts if not script.has_attr("src"))
    if inline_scripts > inline_script_threshold:
        findings.append(
            SecurityFinding(severity="info", message=f"{inline_scripts} inline scripts")
        )

    return findings


class SecurityChecker(BaseExtractor):
    name = "security"

    def default(self) -> Tuple[SecurityFinding, ...]:
        return ()

    async def extract(self, context: ExtractionContext) -> Tuple[SecurityFinding, ...]:
        threshold = self.config.get("inline_script_threshold", INLINE_SCRIPT_THRESHOLD)
        return tuple(check_security(context.soup, context.html, threshold))
