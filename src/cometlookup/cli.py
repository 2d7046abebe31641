"""
cometlookup.cli — Command-line interface for cometlookup.

Provides ``cometlookup candidates``, ``resolve``, ``batch``, ``radec``,
``sbdb`` and ``fetch`` commands.

TLS verification and timeouts come from ``AERITH_VERIFY``,
``AERITH_CA_BUNDLE`` and ``COMETLOOKUP_TIMEOUT`` unless overridden on
the command line.
"""

from __future__ import annotations
import json
import logging
import sys
import click

from cometlookup.config import ClientConfig, parse_verify


def _client_config(ctx: click.Context) -> ClientConfig:
    return ctx.obj["config"]


def _echo_json(record: dict) -> None:
    click.echo(json.dumps(record))


# ---------------------------------------------------------------------------
# CLI commands
# ---------------------------------------------------------------------------

@click.group()
@click.version_option()
@click.option("-v", "--verbose", is_flag=True, help="Log every request")
@click.option("--verify", "verify", default=None,
              help="TLS verification: true, false, or a CA bundle path")
@click.option("--no-verify", is_flag=True, help="Disable TLS verification")
@click.option("--ca-bundle", default=None, help="CA bundle path")
@click.option("--timeout", default=None, type=float,
              help="Catalog/SBDB request timeout in seconds")
@click.pass_context
def main(ctx, verbose, verify, no_verify, ca_bundle, timeout):
    """☄️  cometlookup — Find comet catalog pages, magnitudes and positions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    cfg = ClientConfig.from_env()
    verify_value = None
    if no_verify:
        verify_value = False
    elif verify is not None or ca_bundle:
        verify_value = parse_verify(verify, ca_bundle)
    ctx.obj = {"config": cfg.with_overrides(verify=verify_value, timeout=timeout)}


@main.command()
@click.argument("name", nargs=-1)
@click.option("-d", "--designation", default=None, help="Designation, e.g. 103P or 2025A6")
def candidates(name, designation):
    """List catalog URLs that would be tried, in order.

    Examples:

        cometlookup candidates 12P/Pons-Brooks

        cometlookup candidates -d 2025A6 Lemmon
    """
    from cometlookup.candidates import Directory, catalog_candidates

    for cand in catalog_candidates(" ".join(name), designation):
        kind = "dir " if isinstance(cand, Directory) else "page"
        click.echo(f"{kind}  {cand.url}")


@main.command()
@click.argument("name", nargs=-1, required=True)
@click.option("-d", "--designation", default=None, help="Designation, e.g. 103P or 2025A6")
@click.option("--photometry", is_flag=True, help="Also scrape H/n from the catalog page")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def resolve(ctx, name, designation, photometry, as_json):
    """Resolve one comet to a catalog page or an SBDB magnitude.

    Examples:

        cometlookup resolve 12P

        cometlookup resolve -d 103P Hartley 2 --photometry
    """
    from cometlookup.api import resolve_identifier
    from cometlookup.files import result_to_dict
    from cometlookup.models import Identifier

    ident = Identifier(raw_id=None, name=" ".join(name), designation=designation)
    result = resolve_identifier(ident, config=_client_config(ctx), photometry=photometry)

    if as_json:
        _echo_json(result_to_dict(result))
    elif result.source == "catalog":
        extra = f"  H={result.magnitude_h}" if result.magnitude_h is not None else ""
        click.echo(f"📍 {ident.label()} → {result.matched_url}{extra}")
    elif result.source == "sbdb":
        click.echo(f"🛰  {ident.label()} → SBDB H={result.magnitude_h}")
    else:
        click.echo(f"❌ No match for {ident.label()}", err=True)
        sys.exit(1)


@main.command()
@click.argument("filepath", type=click.Path(dir_okay=False))
@click.option("-o", "--output", default="cometlookup_matches.csv",
              help="CSV summary path")
@click.option("--id-col", default="", help="Identifier column name")
@click.option("--name-col", default="", help="Name column name")
@click.option("--designation-col", default="", help="Designation column name")
@click.option("-n", "--limit", default=0, type=int, help="Max objects (0 = all)")
@click.option("--photometry", is_flag=True, help="Also scrape H/n from catalog pages")
@click.pass_context
def batch(ctx, filepath, output, id_col, name_col, designation_col, limit, photometry):
    """Resolve every comet listed in a file and write a CSV summary.

    FILEPATH may be a CSV/TSV with a header, a FITS/ECSV table, or plain
    text with ``id<TAB>name[<TAB>designation]`` or one name per line.

    Examples:

        cometlookup batch comets.tsv

        cometlookup batch elements.csv --name-col longname -o matches.csv
    """
    from cometlookup.api import resolve_batch
    from cometlookup.errors import InputError
    from cometlookup.files import read_identifiers, write_summary

    try:
        idents = read_identifiers(filepath, id_col=id_col, name_col=name_col,
                                  designation_col=designation_col, limit=limit)
    except InputError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(2)

    click.echo(f"Processing {len(idents)} comets...")

    def report(r):
        label = r.identifier.label()
        if r.source == "catalog":
            click.echo(f"MATCH: {label} -> {r.matched_url}")
        elif r.source == "sbdb":
            click.echo(f"SBDB MATCH: {label} (H={r.magnitude_h})")
        else:
            click.echo(f"NO MATCH: {label}")

    results = list(resolve_batch(idents, config=_client_config(ctx),
                                 photometry=photometry, on_result=report))
    write_summary(results, output)

    unmatched = [r for r in results if not r.matched]
    click.echo(f"\nDone. Matched {len(results) - len(unmatched)} of {len(results)} comets.")
    click.echo(f"💾 Summary written to: {output}")
    if unmatched:
        click.echo("\nComets without matches:")
        for r in unmatched:
            click.echo(f"  {r.identifier.label()}")


@main.command()
@click.argument("designation")
@click.argument("when")
@click.argument("lon", type=float)
@click.argument("lat", type=float)
@click.argument("alt_m", type=float)
@click.option("--ephem", default=None, help="Planetary ephemeris, e.g. DE440")
@click.pass_context
def radec(ctx, designation, when, lon, lat, alt_m, ephem):
    """Topocentric RA/Dec from JPL Horizons, printed as JSON.

    WHEN is a UTC time such as "2025-11-18 16:08"; ALT_M is in metres.

    Examples:

        cometlookup radec 12P "2025-11-24 00:00" 4.84457 49.3447 130
    """
    from cometlookup.api import radec as api_radec
    from cometlookup.errors import CometLookupError

    try:
        eph = api_radec(designation, when, lon=lon, lat=lat, alt_m=alt_m, ephem=ephem,
                        config=_client_config(ctx))
    except CometLookupError as e:
        _echo_json({"error": str(e)})
        sys.exit(1)
    except ValueError as e:
        _echo_json({"error": f"bad time {when!r}: {e}"})
        sys.exit(1)
    _echo_json(eph.to_dict())


@main.command()
@click.argument("query", nargs=-1, required=True)
@click.pass_context
def sbdb(ctx, query):
    """Look up the absolute magnitude H in the JPL Small-Body Database."""
    from cometlookup.api import magnitude

    q = " ".join(query)
    h = magnitude(q, config=_client_config(ctx))
    if h is None:
        click.echo(f"❌ No H found for '{q}'", err=True)
        sys.exit(1)
    click.echo(f"{q}: H={h}")


@main.command()
@click.argument("url", default="https://www.aerith.net/comet/catalog/0103P/")
@click.option("--preview", default=800, type=int, help="Characters of body to show")
@click.pass_context
def fetch(ctx, url, preview):
    """Fetch a URL with the configured client and show what came back."""
    from cometlookup.transport import HttpProbe

    click.echo(f"Fetching: {url}")
    with HttpProbe(_client_config(ctx)) as probe:
        outcome = probe.get(url)
    click.echo(f"Status: {outcome.status_code or '-'} ({outcome.status})")
    if not outcome.ok:
        click.echo(f"❌ {outcome.error or 'not found'}", err=True)
        sys.exit(2 if outcome.status == "not_found" else 3)
    click.echo("Headers:")
    for k, v in outcome.headers.items():
        click.echo(f"  {k}: {v}")
    click.echo(f"Body length: {len(outcome.body)} characters")
    click.echo(f"--- Body preview (first {preview} chars) ---")
    click.echo(outcome.body[:preview])


if __name__ == "__main__":
    main()
