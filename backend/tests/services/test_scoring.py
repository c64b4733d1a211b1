from pageaudit.schemas.report import LayoutSignals, OpenGraph, SEOSignals
from pageaudit.services.scoring import score_seo

COMPLETE_SEO = SEOSignals(
    title="Acme Widgets",
    title_length=12,
    meta_description="Durable widgets.",
    meta_description_length=16,
    h1_count=1,
    h1_text="Widgets",
    canonical="https://acme.example/",
    open_graph=OpenGraph(title="Acme", description="Widgets"),
)
COMPLETE_LAYOUT = LayoutSignals(has_header=True, has_footer=True)


def test_perfect_page_scores_100():
    result = score_seo(COMPLETE_SEO, COMPLETE_LAYOUT)

    assert result.score == 100
    assert result.issues == ()


def test_everything_missing():
    result = score_seo(SEOSignals(), LayoutSignals())

    assert result.score == 100 - 20 - 15 - 20 - 5 - 5 - 5 - 10
    assert result.issues == (
        "Missing page title",
        "Missing meta description",
        "No H1 heading found",
        "No header element",
        "No footer element",
        "No canonical URL",
        "Missing Open Graph tags",
    )


def test_score_never_below_zero():
    seo = SEOSignals(images_without_alt=500)

    result = score_seo(seo, LayoutSignals())

    assert result.score == 10
    assert 0 <= result.score <= 100
    assert "500 images without alt text" in result.issues


def test_alt_penalty_is_two_per_image_capped_at_ten():
    three = score_seo(COMPLETE_SEO.model_copy(update={"images_without_alt": 3}), COMPLETE_LAYOUT)
    many = score_seo(COMPLETE_SEO.model_copy(update={"images_without_alt": 40}), COMPLETE_LAYOUT)

    assert three.score == 94
    assert many.score == 90


def test_length_and_h1_deductions():
    seo = COMPLETE_SEO.model_copy(
        update={
            "title_length": 61,
            "meta_description_length": 161,
            "h1_count": 2,
        }
    )

    result = score_seo(seo, COMPLETE_LAYOUT)

    assert result.score == 100 - 5 - 5 - 10
    assert result.issues == (
        "Title too long (>60 chars)",
        "Meta description too long (>160 chars)",
        "Multiple H1 headings",
    )


def test_open_graph_needs_only_one_field():
    seo = COMPLETE_SEO.model_copy(update={"open_graph": OpenGraph(description="Widgets")})

    assert score_seo(seo, COMPLETE_LAYOUT).score == 100


def test_scoring_is_deterministic():
    seo = SEOSignals(title="x" * 80, title_length=80, images_without_alt=2)
    layout = LayoutSignals(has_header=True)

    assert score_seo(seo, layout) == score_seo(seo, layout)
