from django.urls import include, path

urlpatterns = [
    path("articles/", include("tests.testapp.urls")),
]
