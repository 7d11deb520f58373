from __future__ import annotations

from django.apps import apps
from django.core.management.base import BaseCommand, CommandError, CommandParser
from django.db.models import Q

from seo.behaviors import get_options
from seo.models import SeoModelMixin


class Command(BaseCommand):
    help = (
        "Regenerate SEO urls and fill empty SEO meta for a model using SeoModelMixin. "
        "Ensures uniqueness and keeps user-entered values unless --force-all is given."
    )

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument(
            "model",
            help="Model label, e.g. blog.Post",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Show changes without saving.",
        )
        parser.add_argument(
            "--only-missing",
            action="store_true",
            help="Process only records with missing/empty SEO urls.",
        )
        parser.add_argument(
            "--force-all",
            action="store_true",
            help="Drop existing SEO urls and rebuild them from the source field.",
        )

    def handle(self, *args, **opts) -> None:
        try:
            model = apps.get_model(opts["model"])
        except (LookupError, ValueError) as e:
            raise CommandError(f"Unknown model '{opts['model']}'") from e
        if not issubclass(model, SeoModelMixin):
            raise CommandError(f"{model._meta.label} does not use SeoModelMixin")

        dry = bool(opts.get("dry_run"))
        only_missing = bool(opts.get("only_missing"))
        force_all = bool(opts.get("force_all"))

        qs = model._default_manager.order_by("pk")
        options = get_options(model)
        url_field = options.url_field
        meta_field = options.meta_field
        if url_field and only_missing:
            qs = qs.filter(Q(**{f"{url_field}__isnull": True}) | Q(**{url_field: ""}))

        updated = 0
        skipped = 0

        for obj in qs.iterator():
            behavior = obj.seo
            old_url = getattr(obj, url_field, None) if url_field else None
            old_meta = dict(getattr(obj, meta_field) or {}) if meta_field else None

            if url_field and force_all:
                setattr(obj, url_field, "")
            behavior.before_save()

            new_url = getattr(obj, url_field, None) if url_field else None
            new_meta = getattr(obj, meta_field) if meta_field else None
            if new_url == old_url and new_meta == old_meta:
                skipped += 1
                continue

            if new_url != old_url:
                self.stdout.write(f"{obj.pk}: '{old_url}' -> '{new_url}'")
            else:
                self.stdout.write(f"{obj.pk}: meta filled")
            if not dry:
                fields = [f for f in (url_field, meta_field) if f]
                obj.save(update_fields=fields)
                updated += 1

        self.stdout.write(self.style.SUCCESS(f"Done. Updated: {updated}, Skipped: {skipped}"))
