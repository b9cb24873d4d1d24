from django.core.management.base import BaseCommand, CommandError

from pricing.services.catalog import load_catalog_config, seed_templates, validate_catalog_config
from pricing.services.errors import ConfigurationError


class Command(BaseCommand):
    help = 'Seeds (or re-syncs) the pricing template catalog from its JSON configuration.'

    def add_arguments(self, parser):
        parser.add_argument('--config', help='Path to a catalog JSON file (defaults to the bundled catalog)')
        parser.add_argument('--check', action='store_true', help='Only validate the catalog, do not write')

    def handle(self, *args, **options):
        try:
            catalog = load_catalog_config(options.get('config'))
        except ConfigurationError as e:
            raise CommandError(e.message)

        if options['check']:
            errors = validate_catalog_config(catalog)
            for error in errors:
                self.stdout.write(self.style.ERROR(error))
            if errors:
                raise CommandError(f"Catalog has {len(errors)} errors")
            self.stdout.write(self.style.SUCCESS('Pricing template catalog is valid.'))
            return

        self.stdout.write(self.style.SUCCESS('Seeding pricing templates...'))
        try:
            stats = seed_templates(catalog)
        except ConfigurationError as e:
            raise CommandError(e.message)

        self.stdout.write(self.style.SUCCESS(
            f"Seeded {stats['templates']} templates and {stats['lines']} lines "
            f"({stats['removed_lines']} stale lines removed)."
        ))
