"""Flask CLI commands for calculation and exchange rate maintenance."""
import csv
import json
import click
from flask.cli import with_appcontext

from zakat.constants import ASSET_CATEGORIES, LIABILITY_CATEGORIES
from zakat.context import get_rate_store
from zakat.data.currencies import is_valid_currency
from zakat.services.calc import build_input, compute_zakat


def _category_options(categories, prefix=''):
    def decorator(f):
        for key in reversed(categories):
            f = click.option(
                f"--{prefix}{key.replace('_', '-')}", key,
                default=None, help=f'{key.replace("_", " ").title()} amount'
            )(f)
        return f
    return decorator


@click.command('calculate')
@click.option('--input', 'input_path', type=click.Path(exists=True),
              help='JSON file with an input snapshot; options below override it.')
@_category_options(ASSET_CATEGORIES)
@_category_options(LIABILITY_CATEGORIES, prefix='debt-')
@click.option('--gold-price', type=float, default=None, help='Gold price per gram (USD)')
@click.option('--silver-price', type=float, default=None, help='Silver price per gram (USD)')
@click.option('--standard', type=click.Choice(['gold', 'silver'], case_sensitive=False), default=None)
@click.option('--currency', default=None, help='Display currency code')
@with_appcontext
def calculate_command(input_path, gold_price, silver_price, standard, currency, **amounts):
    """Calculate zakat and print the result as JSON."""
    body = {}
    if input_path:
        with open(input_path, 'r', encoding='utf-8') as f:
            body = json.load(f)
        if not isinstance(body, dict):
            raise click.BadParameter('Input file must contain a JSON object', param_hint='--input')

    assets = dict(body.get('assets') or {})
    liabilities = dict(body.get('liabilities') or {})
    for key, value in amounts.items():
        if value is None:
            continue
        if key in ASSET_CATEGORIES:
            assets[key] = value
        else:
            liabilities[key] = value
    body['assets'] = assets
    body['liabilities'] = liabilities

    if gold_price is not None:
        body['gold_price'] = gold_price
    if silver_price is not None:
        body['silver_price'] = silver_price
    if standard is not None:
        body['standard'] = standard
    if currency is not None:
        if not is_valid_currency(currency):
            raise click.BadParameter(f'Invalid currency: {currency}', param_hint='--currency')
        body['display_currency'] = currency

    calc_input = build_input(body, exchange_rates=get_rate_store().rates)
    result = compute_zakat(calc_input)
    click.echo(json.dumps(result.to_dict(), indent=2))


@click.command('show-rates')
@with_appcontext
def show_rates_command():
    """Print the current exchange rate table."""
    status = get_rate_store().to_dict()
    click.echo(f"Source: {status['source']}  Last updated: {status['last_updated'] or 'never'}"
               f"{'  (stale)' if status['stale'] else ''}")
    for code, rate in status['rates'].items():
        click.echo(f'  {code}  {rate}')


@click.command('refresh-rates')
@with_appcontext
def refresh_rates_command():
    """Refresh exchange rates from the configured provider."""
    result = get_rate_store().refresh()
    if result.used_fallback:
        click.echo(f'Refresh failed ({result.error_message}); using {result.records_count} default rates')
    else:
        click.echo(f'Refreshed {result.records_count} rates from {result.source}')


@click.command('import-rates-csv')
@click.argument('csv_path', type=click.Path(exists=True))
@with_appcontext
def import_rates_csv_command(csv_path):
    """Import manual exchange rates from CSV file.

    CSV format: currency,rate_to_usd
    Example: EUR,0.92
    """
    try:
        count = import_rates_csv(csv_path)
    except ValueError as e:
        raise click.ClickException(str(e))
    click.echo(f'Imported {count} exchange rates from {csv_path}')


def import_rates_csv(csv_path: str) -> int:
    """Import manual rates from CSV file. Returns count of rates imported.

    Raises:
        ValueError: If the header or a row is malformed, or a rate is invalid
            (InvalidRateTableError). Nothing is saved in that case.
    """
    rates = {}
    with open(csv_path, 'r', newline='', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        missing = {'currency', 'rate_to_usd'} - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"CSV is missing columns: {', '.join(sorted(missing))}")
        for row in reader:
            code, rate = row.get('currency'), row.get('rate_to_usd')
            if not code or not code.strip() or rate is None:
                raise ValueError(f'Malformed row on line {reader.line_num}')
            rates[code.strip().upper()] = rate.strip()

    get_rate_store().set_manual_rates(rates)
    return len(rates)


def register_cli(app):
    """Register CLI commands with the Flask app."""
    app.cli.add_command(calculate_command)
    app.cli.add_command(show_rates_command)
    app.cli.add_command(refresh_rates_command)
    app.cli.add_command(import_rates_csv_command)
