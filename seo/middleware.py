# FILE: seo/middleware.py
from .page import PageSeo


class SeoMiddleware:
    """Кладёт в request.seo пустой PageSeo; вьюхи заполняют его через set_seo_data()."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.seo = PageSeo()
        return self.get_response(request)
