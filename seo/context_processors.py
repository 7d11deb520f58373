import logging

from .page import PageSeo

logger = logging.getLogger(__name__)


def seo(request):
    """
    Context processor: SEO-параметры текущей страницы в шаблоне как {{ seo }}.
    Без SeoMiddleware создаём PageSeo прямо здесь.
    """
    page = getattr(request, "seo", None)
    if not isinstance(page, PageSeo):
        if page is not None:
            logger.warning(f"request.seo is {type(page).__name__}, expected PageSeo")
        page = PageSeo()
        request.seo = page
    return {"seo": page}
