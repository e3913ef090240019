import logging
import re
from typing import List

from sitecarbon.core.config import settings
from sitecarbon.errors import CollaboratorError

logger = logging.getLogger(__name__)

STATIC_RECOMMENDATIONS = [
    "Optimize images using modern formats like WebP and AVIF.",
    "Minimize JavaScript and CSS files by reducing unused code.",
    "Enable browser caching to reduce redundant network requests.",
    "Use a content delivery network (CDN) for faster loading.",
    "Host your website on a green energy-powered server.",
    "Avoid autoplaying videos and large media files when unnecessary.",
    "Implement lazy loading for images and videos.",
    "Reduce third-party scripts and use asynchronous loading where possible.",
    "Use static site generation (SSG) or server-side rendering (SSR) for efficiency.",
    "Minimize HTTP requests by combining files and reducing dependencies.",
    "Implement dark mode where appropriate (OLED screens use less energy).",
    "Use efficient fonts and limit the number of font files loaded.",
    "Remove unnecessary tracking scripts and analytics where possible.",
    "Enable Gzip or Brotli compression to reduce file sizes.",
    "Use efficient database queries and optimize backend processing.",
    "Regularly audit your website performance using Lighthouse or WebPageTest.",
    "Educate users and developers on sustainable web design principles.",
]

RECOMMENDATION_COUNT = 5

class Recommender:
    """Produces the recommendation list attached to a report."""
    generated = False

    async def recommend(self, url: str, resource_size_kb: float, co2_grams: float) -> List[str]:
        raise NotImplementedError

class StaticRecommender(Recommender):
    async def recommend(self, url: str, resource_size_kb: float, co2_grams: float) -> List[str]:
        return list(STATIC_RECOMMENDATIONS)

class GeminiRecommender(Recommender):
    """Personalized recommendations written by Gemini. One attempt per request."""
    generated = True

    async def recommend(self, url: str, resource_size_kb: float, co2_grams: float) -> List[str]:
        if settings.USE_MOCK:
            return _mock_recommendations(resource_size_kb)

        prompt = build_prompt(url, resource_size_kb, co2_grams)
        try:
            model = get_gemini_model()
            logger.info("LLM request for %s: prompt_len=%d, timeout=%ss", url, len(prompt), settings.LLM_TIMEOUT_SECONDS)
            response = await model.generate_content_async(
                prompt,
                generation_config={"max_output_tokens": settings.LLM_MAX_OUTPUT_TOKENS},
                request_options={"timeout": settings.LLM_TIMEOUT_SECONDS},
            )
            text = response.text
        except CollaboratorError:
            raise
        except Exception as e:
            raise CollaboratorError("gemini", f"Gemini completion failed: {e}") from e

        recommendations = parse_recommendations(text or "")
        if not recommendations:
            raise CollaboratorError("gemini", "Empty response from Gemini")
        return recommendations

def get_gemini_model():
    """Get configured Gemini model"""
    if not settings.GOOGLE_API_KEY:
        raise CollaboratorError("gemini", "GOOGLE_API_KEY not set")

    import google.generativeai as genai  # lazy import keeps startup light

    genai.configure(api_key=settings.GOOGLE_API_KEY)
    return genai.GenerativeModel(settings.GEMINI_MODEL)

def build_prompt(url: str, resource_size_kb: float, co2_grams: float) -> str:
    return (
        "Analyze the following website's CO2 emissions and provide sustainability recommendations.\n"
        f"Website: {url}\n"
        "Data:\n"
        f"- Resource Size: {resource_size_kb:.2f} KB\n"
        f"- CO2 Emissions: {co2_grams:.4f} g\n\n"
        f"Provide {RECOMMENDATION_COUNT} personalized recommendations to reduce emissions "
        "while maintaining user experience.\n"
        "Return one recommendation per line, without headings or extra commentary."
    )

_LIST_MARKER = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")

def parse_recommendations(text: str) -> List[str]:
    """Split a completion into one recommendation per non-empty line, dropping list markers."""
    items = []
    for line in text.splitlines():
        line = _LIST_MARKER.sub("", line).strip().strip("*").strip()
        if line:
            items.append(line)
    return items

def _mock_recommendations(resource_size_kb: float) -> List[str]:
    """Mock implementation for testing without LLM API"""
    return [
        f"Reduce the {resource_size_kb:.2f} KB payload by compressing images to WebP or AVIF.",
        "Defer non-critical JavaScript and remove unused CSS.",
        "Serve static assets through a CDN with long cache lifetimes.",
        "Move hosting to a provider powered by renewable energy.",
        "Lazy-load media that sits below the fold.",
    ]
