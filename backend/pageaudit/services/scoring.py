from pageaudit.schemas.report import LayoutSignals, ScoreResult, SEOSignals

MAX_TITLE_LENGTH = 60
MAX_DESCRIPTION_LENGTH = 160
ALT_PENALTY_PER_IMAGE = 2
ALT_PENALTY_CAP = 10


def score_seo(seo: SEOSignals, layout: LayoutSignals) -> ScoreResult:
    """
    Score on-page SEO out of 100 with a fixed deduction per issue.

    Each deduction adds exactly one issue message, in check order, so the
    points lost can always be read back from the issue list. The result is
    clamped to [0, 100].

    Args:
        seo: Extracted SEO fields
        layout: Extracted layout flags (header/footer presence)

    Returns:
        ScoreResult with the score and issue messages
    """
    score = 100
    issues = []

    if not seo.title:
        score -= 20
        issues.append("Missing page title")
    elif seo.title_length > MAX_TITLE_LENGTH:
        score -= 5
        issues.append(f"Title too long (>{MAX_TITLE_LENGTH} chars)")

    if not seo.meta_description:
        score -= 15
        issues.append("Missing meta description")
    elif seo.meta_description_length > MAX_DESCRIPTION_LENGTH:
        score -= 5
        issues.append(f"Meta description too long (>{MAX_DESCRIPTION_LENGTH} chars)")

    if seo.h1_count == 0:
        score -= 20
        issues.append("No H1 heading found")
    elif seo.h1_count > 1:
        score -= 10
        issues.append("Multiple H1 headings")

    if seo.images_without_alt > 0:
        score -= min(ALT_PENALTY_CAP, seo.images_without_alt * ALT_PENALTY_PER_IMAGE)
        issues.append(f"{seo.images_without_alt} images without alt text")

    if not layout.has_header:
        score -= 5
        issues.append("No header element")
    if not layout.has_footer:
        score -= 5
        issues.append("No footer element")

    if not seo.canonical:
        score -= 5
        issues.append("No canonical URL")

    if not seo.open_graph.title and not seo.open_graph.description:
        score -= 10
        issues.append("Missing Open Graph tags")

    return ScoreResult(score=max(0, min(100, score)), issues=tuple(issues))
