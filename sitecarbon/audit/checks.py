"""
Scoring for the browser audit.

The browser only collects raw material (rendered HTML, paint/layout timings);
everything here is pure and works on plain strings and numbers so it can be
tested without a browser.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from bs4 import BeautifulSoup, Doctype

from sitecarbon.schemas import (
    AccessibilitySection,
    AuditReport,
    BestPracticesSection,
    PerformanceSection,
    SeoSection,
)

# "Good" limits used by Core Web Vitals / Lighthouse
FCP_GOOD_MS = 1800
LCP_GOOD_MS = 2500
TBT_GOOD_MS = 200
CLS_GOOD = 0.1

NO_ISSUES = "No major issues found"


@dataclass
class Check:
    id: str
    title: str  # describes the failure, like Lighthouse audit titles
    passed: bool


def format_metric(ms: Optional[float]) -> str:
    return f"{ms / 1000:.2f} sec" if ms is not None else "N/A"


def format_shift(value: Optional[float]) -> str:
    return f"{value:.3f}" if value is not None else "N/A"


def format_score(score: float) -> str:
    return f"{score * 100:.0f}%"


def score_checks(checks: List[Check]) -> float:
    if not checks:
        return 0.0
    return sum(1 for c in checks if c.passed) / len(checks)


def performance_checks(metrics: Dict[str, Any]) -> List[Check]:
    """One check per metric the browser managed to record."""
    limits = [
        ("first-contentful-paint", "fcp", FCP_GOOD_MS, "First Contentful Paint is slow"),
        ("largest-contentful-paint", "lcp", LCP_GOOD_MS, "Largest Contentful Paint is slow"),
        ("total-blocking-time", "tbt", TBT_GOOD_MS, "Total Blocking Time is high"),
        ("cumulative-layout-shift", "cls", CLS_GOOD, "Cumulative Layout Shift is high"),
    ]
    checks = []
    for check_id, key, limit, title in limits:
        value = metrics.get(key)
        if value is None:
            continue
        checks.append(Check(check_id, title, value <= limit))
    return checks


def _has_text(tag) -> bool:
    if tag.get_text(strip=True):
        return True
    if tag.get("aria-label") or tag.get("title") or tag.get("aria-labelledby"):
        return True
    return any(img.get("alt") for img in tag.find_all("img"))


def _input_labelled(soup: BeautifulSoup, field) -> bool:
    if field.get("aria-label") or field.get("aria-labelledby") or field.get("title"):
        return True
    if field.find_parent("label") is not None:
        return True
    field_id = field.get("id")
    return bool(field_id and soup.find("label", attrs={"for": field_id}))


def accessibility_checks(soup: BeautifulSoup) -> List[Check]:
    html = soup.find("html")
    title = soup.find("title")
    images = soup.find_all("img")
    links = soup.find_all("a", href=True)
    buttons = soup.find_all("button")
    fields = [
        f for f in soup.find_all(["input", "select", "textarea"])
        if f.get("type", "").lower() not in ("hidden", "submit", "button", "reset", "image")
    ]
    return [
        Check("html-has-lang", "`<html>` element does not have a `[lang]` attribute",
              bool(html is not None and html.get("lang"))),
        Check("document-title", "Document doesn't have a `<title>` element",
              bool(title is not None and title.get_text(strip=True))),
        Check("image-alt", "Image elements do not have `[alt]` attributes",
              all(img.has_attr("alt") for img in images)),
        Check("link-name", "Links do not have a discernible name",
              all(_has_text(a) for a in links)),
        Check("button-name", "Buttons do not have an accessible name",
              all(_has_text(b) for b in buttons)),
        Check("label", "Form elements do not have associated labels",
              all(_input_labelled(soup, f) for f in fields)),
    ]


def _meta_content(soup: BeautifulSoup, name: str) -> str:
    meta = soup.find("meta", attrs={"name": name})
    return (meta.get("content") or "").strip() if meta is not None else ""


def seo_checks(soup: BeautifulSoup) -> List[Check]:
    title = soup.find("title")
    return [
        Check("viewport", "Does not have a `<meta name=\"viewport\">` tag", bool(_meta_content(soup, "viewport"))),
        Check("meta-description", "Document does not have a meta description", bool(_meta_content(soup, "description"))),
        Check("document-title", "Document doesn't have a `<title>` element",
              bool(title is not None and title.get_text(strip=True))),
        Check("is-crawlable", "Page is blocked from indexing", "noindex" not in _meta_content(soup, "robots").lower()),
    ]


def best_practice_checks(soup: BeautifulSoup, final_url: str) -> List[Check]:
    has_doctype = any(isinstance(item, Doctype) for item in soup.contents)
    has_charset = soup.find("meta", attrs={"charset": True}) is not None or soup.find(
        "meta", attrs={"http-equiv": lambda v: v and v.lower() == "content-type"}
    ) is not None
    return [
        Check("is-on-https", "Does not use HTTPS", final_url.startswith("https://")),
        Check("doctype", "Page lacks the HTML doctype", has_doctype),
        Check("charset", "Charset declaration is missing", has_charset),
    ]


def _find(checks: List[Check], check_id: str) -> Check:
    return next(c for c in checks if c.id == check_id)


def summarize_audit(raw: Dict[str, Any]) -> AuditReport:
    """
    Turn what the browser collected into the audit report.

    ``raw`` holds ``final_url``, ``fetch_time``, ``html`` and ``metrics``
    (``fcp``/``lcp``/``tbt`` in milliseconds, ``cls`` unitless; any may be None).
    """
    metrics = raw.get("metrics") or {}
    soup = BeautifulSoup(raw.get("html") or "", "html.parser")
    final_url = raw.get("final_url") or ""

    perf = performance_checks(metrics)
    a11y = accessibility_checks(soup)
    seo = seo_checks(soup)
    best = best_practice_checks(soup, final_url)

    issues: Union[List[str], str] = [c.title for c in a11y if not c.passed] or NO_ISSUES

    return AuditReport(
        url=final_url,
        fetch_time=raw.get("fetch_time", ""),
        performance=PerformanceSection(
            score=format_score(score_checks(perf)),
            first_contentful_paint=format_metric(metrics.get("fcp")),
            largest_contentful_paint=format_metric(metrics.get("lcp")),
            total_blocking_time=format_metric(metrics.get("tbt")),
            cumulative_layout_shift=format_shift(metrics.get("cls")),
        ),
        accessibility=AccessibilitySection(score=format_score(score_checks(a11y)), issues=issues),
        seo=SeoSection(
            score=format_score(score_checks(seo)),
            mobile_friendly="Yes" if _find(seo, "viewport").passed else "No",
            meta_tags="Present" if _find(seo, "meta-description").passed else "Missing",
        ),
        best_practices=BestPracticesSection(
            score=format_score(score_checks(best)),
            security_issues="None" if _find(best, "is-on-https").passed else "Not Secure",
        ),
    )
