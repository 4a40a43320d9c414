# src/ichi_code_mapper/cli.py
import json
import logging
from pathlib import Path

import click
from tqdm import tqdm

from ichi_code_mapper.config import load_config, get_decoder_config, get_dictionary_config
from ichi_code_mapper.decoder import CodeDecomposer, CodeInputError
from ichi_code_mapper.delimited import get_parser
from ichi_code_mapper.mapper import IchiDictionary
from ichi_code_mapper.registry import init_ichi_dictionary
from ichi_code_mapper.types import CombinedInput, SeparateInput
from ichi_code_mapper.utils import entries_to_dataframe, export_dictionary_to_csv, render_seed_snippet

logger = logging.getLogger(__name__)


def _build_dictionary(cfg, extra_files=()):
    dict_cfg = get_dictionary_config(cfg)
    dictionary = IchiDictionary(
        parser=get_parser(dict_cfg.get("parser", "lenient"), dict_cfg.get("delimiter", ","))
    )
    files = list(dict_cfg.get("files") or []) + list(extra_files)
    return init_ichi_dictionary(files, dictionary=dictionary, encoding=dict_cfg.get("encoding", "utf-8"))


def _echo_group(title, entries):
    click.echo(f"{title}:")
    if not entries:
        click.echo("  (none)")
    for entry in entries:
        click.echo(f"  {entry.code}  {entry.description}")


@click.group()
@click.option("--config", "config_path", default=None,
              type=click.Path(exists=True, dir_okay=False), help="YAML config file")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output")
@click.pass_context
def cli(ctx, config_path, verbose):
    """ICHI code decoder CLI"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"config": load_config(config_path)}


@cli.command()
@click.argument("code", required=False)
@click.option("--stem", "stems", multiple=True, help="Stem code slot (repeatable)")
@click.option("--ext", "extensions", multiple=True, help="Extension code slot (repeatable)")
@click.option("--dictionary", "dictionary_files", multiple=True,
              type=click.Path(exists=True, dir_okay=False), help="Extra code,description table")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def decode(ctx, code, stems, extensions, dictionary_files, as_json):
    """Look up CODE (e.g. "AAA.AA.ZZ & XA01") or the --stem/--ext slots."""
    cfg = ctx.obj["config"]
    dec_cfg = get_decoder_config(cfg)

    if code is not None and (stems or extensions):
        raise click.UsageError("Give either a combined CODE or --stem/--ext slots, not both.")
    if len(stems) > dec_cfg["stem_slots"]:
        raise click.BadParameter(f"at most {dec_cfg['stem_slots']} stem codes", param_hint="--stem")
    if len(extensions) > dec_cfg["extension_slots"]:
        raise click.BadParameter(f"at most {dec_cfg['extension_slots']} extension codes", param_hint="--ext")

    decomposer = CodeDecomposer(
        _build_dictionary(cfg, dictionary_files),
        placeholder=dec_cfg["not_found_placeholder"],
        joiner=dec_cfg["full_code_joiner"],
        separator=dec_cfg["combined_separator"],
        stem_marker=dec_cfg["stem_marker"],
    )
    code_input = CombinedInput(code) if code is not None else SeparateInput(stems, extensions)

    try:
        result = decomposer.decode(code_input)
    except CodeInputError as e:
        click.echo(str(e), err=True)
        ctx.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    click.echo(f"Result: {result.full_code}")
    _echo_group("Stem codes", result.stem_results)
    _echo_group("Extension codes", result.extension_results)


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--progress/--no-progress", default=True, help="Show progress bar")
@click.pass_context
def load(ctx, files, progress):
    """Check code,description tables and report how many codes each adds.

    The tables are merged into a dictionary that lives only for this command,
    so nothing is saved. Pass them to `decode`/`export` with --dictionary,
    or list them under `dictionary.files` in the config, to use them.
    """
    cfg = ctx.obj["config"]
    encoding = get_dictionary_config(cfg).get("encoding", "utf-8")
    dictionary = _build_dictionary(cfg)

    for path in tqdm(files, desc="Loading tables", unit="file", disable=not progress):
        imported = dictionary.merge_from_delimited_text(Path(path).read_text(encoding=encoding))
        click.echo(f"{path}: loaded {imported:,} codes")

    click.echo(f"Dictionary now holds {len(dictionary):,} codes")
    click.echo("Nothing was saved; use --dictionary or dictionary.files to apply these tables.")


@cli.command()
@click.pass_context
def stats(ctx):
    """Report how many codes the dictionary holds."""
    dictionary = _build_dictionary(ctx.obj["config"])
    click.echo(f"Registered codes: {len(dictionary):,}")


@cli.command()
@click.option("--format", "fmt", type=click.Choice(["csv", "seed"]), default="csv")
@click.option("--dictionary", "dictionary_files", multiple=True,
              type=click.Path(exists=True, dir_okay=False), help="Extra code,description table")
@click.option("--output", type=click.Path(dir_okay=False), default=None)
@click.pass_context
def export(ctx, fmt, dictionary_files, output):
    """Write the dictionary as CSV or as seed entries for seed.py."""
    dictionary = _build_dictionary(ctx.obj["config"], dictionary_files)

    if fmt == "csv" and output:
        export_dictionary_to_csv(dictionary, output)
        click.echo(f"Exported {len(dictionary):,} codes to {output}")
        return

    if fmt == "csv":
        text = entries_to_dataframe(dictionary.export_all()).to_csv(index=False)
    else:
        text = render_seed_snippet(dictionary.export_all())

    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        click.echo(f"Exported {len(dictionary):,} codes to {output}")
    else:
        click.echo(text)


if __name__ == "__main__":
    cli()
