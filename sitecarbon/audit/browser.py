import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict

from playwright.async_api import Browser, Error as PlaywrightError, TimeoutError as PlaywrightTimeout, async_playwright

from sitecarbon.core.config import settings
from sitecarbon.errors import CollaboratorError
from sitecarbon.schemas import AuditReport
from .checks import summarize_audit

logger = logging.getLogger(__name__)

# Registered before any page script runs so buffered entries are not missed
METRICS_INIT_SCRIPT = """
window.__auditMetrics = { lcp: null, cls: 0, tbt: 0 };
try {
  new PerformanceObserver((list) => {
    for (const e of list.getEntries()) window.__auditMetrics.lcp = e.startTime;
  }).observe({ type: 'largest-contentful-paint', buffered: true });
  new PerformanceObserver((list) => {
    for (const e of list.getEntries()) if (!e.hadRecentInput) window.__auditMetrics.cls += e.value;
  }).observe({ type: 'layout-shift', buffered: true });
  new PerformanceObserver((list) => {
    for (const e of list.getEntries()) window.__auditMetrics.tbt += Math.max(0, e.duration - 50);
  }).observe({ type: 'longtask', buffered: true });
} catch (e) {}
"""

COLLECT_METRICS_SCRIPT = """
() => {
  const paint = performance.getEntriesByName('first-contentful-paint')[0];
  const m = window.__auditMetrics || {};
  return {
    fcp: paint ? paint.startTime : null,
    lcp: m.lcp === undefined ? null : m.lcp,
    cls: m.cls === undefined ? null : m.cls,
    tbt: m.tbt === undefined ? null : m.tbt,
  };
}
"""

@asynccontextmanager
async def launch_browser() -> AsyncIterator[Browser]:
    """
    Launch headless Chromium for the duration of the block.

    The browser is closed on every way out of the block, including errors,
    so no Chromium process outlives its audit.
    """
    async with async_playwright() as p:
        browser = await p.chromium.launch(
            headless=settings.PLAYWRIGHT_HEADLESS,
            args=[
                '--no-sandbox',
                '--disable-dev-shm-usage',
                '--disable-gpu',
            ]
        )
        try:
            yield browser
        finally:
            await browser.close()
            logger.debug("Browser closed")

async def collect_page(browser: Browser, url: str) -> Dict[str, Any]:
    """Load ``url`` in a fresh page and gather rendered HTML plus timing metrics."""
    page = await browser.new_page(user_agent=settings.USER_AGENT)
    await page.add_init_script(METRICS_INIT_SCRIPT)
    await page.goto(url, timeout=settings.AUDIT_TIMEOUT_SECONDS * 1000, wait_until="load")
    # Let LCP and late layout shifts settle
    await page.wait_for_timeout(settings.AUDIT_SETTLE_MS)

    metrics = await page.evaluate(COLLECT_METRICS_SCRIPT)
    html = await page.content()
    return {
        "final_url": page.url,
        "fetch_time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
        "html": html,
        "metrics": metrics,
    }

async def run_audit(url: str) -> AuditReport:
    logger.info("Running browser audit for: %s", url)
    try:
        async with launch_browser() as browser:
            raw = await collect_page(browser, url)
    except PlaywrightTimeout:
        raise CollaboratorError("browser-audit", f"Timeout while auditing {url}")
    except PlaywrightError as e:
        raise CollaboratorError("browser-audit", f"Failed to audit {url}: {e.message}")
    return summarize_audit(raw)
