"""Tests for :mod:`seo.forms`: SEO inputs on model forms."""

from __future__ import annotations

import pytest
from django import forms

from seo.forms import SeoFormMixin
from tests.testapp.models import Article, Note, Page

pytestmark = pytest.mark.django_db


class ArticleForm(SeoFormMixin, forms.ModelForm):
    class Meta:
        model = Article
        fields = ["title", "body", "tags"]


class ArticleUrlForm(SeoFormMixin, forms.ModelForm):
    class Meta:
        model = Article
        fields = ["title", "seo_url"]


class NoteForm(SeoFormMixin, forms.ModelForm):
    class Meta:
        model = Note
        fields = ["text", "hidden"]


class PageForm(SeoFormMixin, forms.ModelForm):
    class Meta:
        model = Page
        fields = ["section", "name"]


class PageSlugForm(SeoFormMixin, forms.ModelForm):
    class Meta:
        model = Page
        fields = ["section", "name", "slug"]


class TestFormFields:
    """
    REQUIREMENT: Editors see the SEO url and every meta field per language,
    unless client_change forbids it.
    """

    def test_url_and_meta_fields_are_added(self) -> None:
        form = ArticleForm()

        expected = {
            "seo_url",
            "seo_meta_title_ru", "seo_meta_desc_ru", "seo_meta_keys_ru",
            "seo_meta_title_en", "seo_meta_desc_en", "seo_meta_keys_en",
        }
        assert expected <= set(form.fields), f"Missing: {expected - set(form.fields)}"

    def test_labels_carry_language_when_several(self) -> None:
        form = ArticleForm()

        assert form.fields["seo_meta_title_ru"].label == "SEO: title RU"
        assert form.fields["seo_meta_keys_en"].label == "SEO: keys EN"

    def test_description_is_textarea(self) -> None:
        form = ArticleForm()

        assert isinstance(form.fields["seo_meta_desc_ru"].widget, forms.Textarea)
        assert isinstance(form.fields["seo_meta_title_ru"].widget, forms.TextInput)

    def test_initial_values_from_instance(self) -> None:
        article = Article.objects.create(title="Привет", seo_meta={"title_en": "Hello"})

        form = ArticleForm(instance=article)

        assert form.fields["seo_meta_title_en"].initial == "Hello"
        assert form.fields["seo_url"].initial == "privet"

    def test_client_change_forbidden_adds_nothing(self) -> None:
        form = NoteForm(instance=Note(text="x", hidden=True))

        assert set(form.fields) == {"text", "hidden"}

    def test_client_change_forbidden_drops_listed_url_field(self, monkeypatch) -> None:
        """
        When editing SEO data is not allowed and Meta.fields lists the url field
        Then the field is removed and the slug is still generated from the name
        """
        monkeypatch.setattr(Page, "seo_config", {**Page.seo_config, "client_change": False})

        form = PageSlugForm(data={"section": "news", "name": "Hello", "slug": "Ignored"})

        assert "slug" not in form.fields
        assert form.is_valid(), form.errors
        assert form.save().slug == "Hello"


class TestFormSave:
    def test_meta_input_is_stored_and_rest_generated(self) -> None:
        form = ArticleForm(
            data={"title": "Привет мир", "body": "Тело", "tags": "", "seo_url": "", "seo_meta_title_en": "Hello"}
        )

        assert form.is_valid(), form.errors
        article = form.save()

        assert article.seo_url == "privet-mir"
        assert article.seo_meta["title_en"] == "Hello"
        assert article.seo_meta["title_ru"] == "Привет мир"
        assert article.seo_meta["desc_ru"] == "Тело"

    def test_url_input_is_normalized(self) -> None:
        form = ArticleForm(data={"title": "T", "body": "", "tags": "", "seo_url": "My Page"})

        assert form.is_valid(), form.errors

        assert form.save().seo_url == "my-page"

    def test_model_url_field_in_form_is_not_duplicated(self) -> None:
        Article.objects.create(title="Custom")
        form = ArticleUrlForm(data={"title": "T", "seo_url": "Custom"})

        assert form.is_valid(), form.errors

        assert form.save().seo_url == "custom_"

    def test_url_field_for_model_without_meta(self) -> None:
        form = PageForm(data={"section": "news", "name": "Страница", "slug": "My Page"})

        assert form.is_valid(), form.errors
        page = form.save()

        assert page.slug == "My-Page"
