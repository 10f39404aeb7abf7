import json
from typing import Any, NoReturn, cast

import regex
import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core.config import SETTINGS, Settings
from ..core.errors import ArgumentError
from ..core.logging import LogFormat, log, setup_logging
from ..text import (
    at as grapheme_at,
    jaro_distance,
    replace as replace_buffer,
    reverse as reverse_buffer,
    slice_from,
    slice_range,
    split as split_buffer,
)
from ..unicode import (
    Codepoint,
    chunk as chunk_buffer,
    graphemes as grapheme_list,
    iter_units,
    length as grapheme_length,
    printable as is_printable,
    valid as is_valid,
)
from ..unicode.casing import normalize as normalize_buffer

app = typer.Typer(add_completion=False, help="Unicode-aware operations on UTF-8 text")

HEX_INPUT = typer.Option(False, "--hex", help="Arguments are hex-encoded bytes")


@app.callback()
def _init(
    config_file: str | None = typer.Option(
        None,
        "--config",
        help="Config file (.unistring.yaml auto-discovered)",
    ),
    output_format: str | None = typer.Option(None, "--format", help="Output format: text|json"),
    hex_output: bool | None = typer.Option(
        None, "--hex-output/--text-output", help="Print byte results as hex"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log command events at INFO"),
) -> None:
    """Load configuration and set up logging before any command runs."""
    try:
        settings = Settings.load_config(config_file)
    except Exception as e:
        typer.echo(f"❌ Config error: {e}", err=True)
        raise typer.Exit(1) from e

    # Library modules read the shared SETTINGS instance
    for name in Settings.model_fields:
        setattr(SETTINGS, name, getattr(settings, name))

    # CLI flags have the highest precedence
    if output_format is not None:
        if output_format not in ("text", "json"):
            raise typer.BadParameter(f"expected text or json, got {output_format!r}")
        SETTINGS.OUTPUT_FORMAT = output_format
    if hex_output is not None:
        SETTINGS.CLI_HEX_OUTPUT = hex_output

    log_format = SETTINGS.LOG_FORMAT if SETTINGS.LOG_FORMAT in ("json", "plain", "auto") else "auto"
    setup_logging(
        format_type=cast(LogFormat, log_format),
        level="INFO" if verbose else SETTINGS.LOG_LEVEL,
    )
    log.info("config.loaded", config_file=config_file or "auto-discovered")


def _buffer(value: str, hex_input: bool) -> bytes:
    """Turn a command-line argument into the bytes it stands for."""
    if hex_input:
        try:
            return bytes.fromhex(value)
        except ValueError as e:
            raise typer.BadParameter(f"not a hex string: {value!r}") from e
    # sys.argv smuggles undecodable bytes through as surrogates
    return value.encode("utf-8", "surrogateescape")


def _show(buffer: bytes) -> str:
    if SETTINGS.CLI_HEX_OUTPUT:
        return buffer.hex()
    return buffer.decode("utf-8", "backslashreplace")


def _emit(value: Any) -> None:
    if SETTINGS.OUTPUT_FORMAT == "json":
        typer.echo(json.dumps(value, ensure_ascii=False))
    elif isinstance(value, bool):
        typer.echo("true" if value else "false")
    elif isinstance(value, list):
        for item in value:
            typer.echo(item)
    elif value is not None:
        typer.echo(value)


def _fail(error: Exception) -> NoReturn:
    typer.echo(f"❌ {error}", err=True)
    raise typer.Exit(2) from error


def _compile_regex(expression: str) -> "regex.Pattern[str]":
    try:
        return regex.compile(expression)
    except regex.error as e:
        raise typer.BadParameter(f"invalid regular expression {expression!r}: {e}") from e


@app.command()
def version() -> None:
    from .. import __version__

    typer.echo(__version__)


@app.command()
def length(text: str, hex_input: bool = HEX_INPUT) -> None:
    """Count grapheme clusters."""
    buffer = _buffer(text, hex_input)
    count = grapheme_length(buffer)
    log.info("cli.length", bytes=len(buffer), graphemes=count)
    _emit(count)


@app.command()
def graphemes(text: str, hex_input: bool = HEX_INPUT) -> None:
    """List grapheme clusters with their byte widths."""
    buffer = _buffer(text, hex_input)
    clusters = grapheme_list(buffer)
    log.info("cli.graphemes", bytes=len(buffer), graphemes=len(clusters))

    if SETTINGS.OUTPUT_FORMAT == "json":
        _emit([_show(cluster) for cluster in clusters])
        return

    table = Table(title="Graphemes", show_header=True, header_style="bold yellow")
    table.add_column("#", justify="right")
    table.add_column("Grapheme")
    table.add_column("Bytes", style="green")
    table.add_column("Width", justify="right")
    for idx, cluster in enumerate(clusters):
        table.add_row(
            str(idx),
            Text(cluster.decode("utf-8", "backslashreplace")),
            cluster.hex(" "),
            str(len(cluster)),
        )
    Console().print(table)


@app.command()
def codepoints(text: str, hex_input: bool = HEX_INPUT) -> None:
    """List codepoints; bytes that are not valid UTF-8 show up as invalid."""
    buffer = _buffer(text, hex_input)
    rows = []
    for pos, unit in iter_units(buffer):
        if isinstance(unit, Codepoint):
            name = f"U+{unit.value:04X}"
        else:
            name = f"invalid 0x{unit.byte:02X}"
        rows.append((pos, name, buffer[pos : pos + unit.width]))
    log.info("cli.codepoints", bytes=len(buffer), codepoints=len(rows))

    if SETTINGS.OUTPUT_FORMAT == "json":
        _emit([{"offset": pos, "codepoint": name, "bytes": raw.hex()} for pos, name, raw in rows])
        return

    table = Table(title="Codepoints", show_header=True, header_style="bold yellow")
    table.add_column("Offset", justify="right")
    table.add_column("Codepoint")
    table.add_column("Bytes", style="green")
    for pos, name, raw in rows:
        table.add_row(str(pos), name, raw.hex(" "))
    Console().print(table)


@app.command()
def at(text: str, index: int, hex_input: bool = HEX_INPUT) -> None:
    """Print the grapheme at INDEX (negative counts from the end)."""
    found = grapheme_at(_buffer(text, hex_input), index)
    log.info("cli.at", index=index, found=found is not None)
    if found is None:
        _emit(None)
        raise typer.Exit(1)
    _emit(_show(found))


@app.command("slice")
def slice_cmd(
    text: str,
    start: int,
    count: int | None = typer.Option(None, "--count", help="Number of graphemes to take"),
    last: int | None = typer.Option(None, "--last", help="Inclusive index of the last grapheme"),
    hex_input: bool = HEX_INPUT,
) -> None:
    """Slice by grapheme position: START with --count, or START through --last."""
    if count is not None and last is not None:
        raise typer.BadParameter("--count and --last are mutually exclusive")
    buffer = _buffer(text, hex_input)
    if count is not None:
        result = slice_from(buffer, start, count)
    else:
        result = slice_range(buffer, start, last)
    log.info("cli.slice", start=start, count=count, last=last, bytes=len(result))
    _emit(_show(result))


@app.command()
def split(
    text: str,
    patterns: list[str] | None = typer.Argument(None, help="Literal(s) to split on"),
    parts: int | None = typer.Option(None, "--parts", help="Maximum number of segments"),
    trim: bool = typer.Option(False, "--trim", help="Drop empty segments"),
    use_regex: bool = typer.Option(False, "--regex", help="Treat the pattern as a regular expression"),
    hex_input: bool = HEX_INPUT,
) -> None:
    """Split on whitespace, on one or more literals, or on a regular expression."""
    buffer = _buffer(text, hex_input)
    pattern: Any = None
    if use_regex:
        if not patterns or len(patterns) != 1:
            raise typer.BadParameter("--regex takes exactly one pattern")
        pattern = _compile_regex(patterns[0])
    elif patterns:
        literals = [_buffer(p, hex_input) for p in patterns]
        pattern = literals[0] if len(literals) == 1 else literals

    try:
        segments = split_buffer(buffer, pattern, parts=parts, trim=trim)
    except ArgumentError as e:
        _fail(e)
    log.info("cli.split", bytes=len(buffer), segments=len(segments), regex=use_regex)
    _emit([_show(segment) for segment in segments])


@app.command()
def replace(
    text: str,
    pattern: str,
    replacement: str,
    first: bool = typer.Option(False, "--first", help="Replace only the first occurrence"),
    use_regex: bool = typer.Option(False, "--regex", help="Treat the pattern as a regular expression"),
    insert_at: list[int] | None = typer.Option(
        None, "--insert-at", help="Offset in REPLACEMENT where the match is re-inserted"
    ),
    hex_input: bool = HEX_INPUT,
) -> None:
    """Replace occurrences of PATTERN with REPLACEMENT."""
    buffer = _buffer(text, hex_input)
    target: Any = _compile_regex(pattern) if use_regex else _buffer(pattern, hex_input)
    try:
        result = replace_buffer(
            buffer,
            target,
            _buffer(replacement, hex_input),
            global_=not first,
            insert_replaced=insert_at or None,
        )
    except ArgumentError as e:
        _fail(e)
    log.info("cli.replace", bytes=len(buffer), first=first, regex=use_regex)
    _emit(_show(result))


@app.command()
def reverse(text: str, hex_input: bool = HEX_INPUT) -> None:
    """Reverse grapheme order."""
    result = reverse_buffer(_buffer(text, hex_input))
    log.info("cli.reverse", bytes=len(result))
    _emit(_show(result))


@app.command()
def jaro(first: str, second: str, hex_input: bool = HEX_INPUT) -> None:
    """Jaro similarity of two strings, 0.0 to 1.0."""
    score = jaro_distance(_buffer(first, hex_input), _buffer(second, hex_input))
    log.info("cli.jaro", score=score)
    _emit(round(score, SETTINGS.JARO_PRECISION))


@app.command()
def valid(text: str, hex_input: bool = HEX_INPUT) -> None:
    """Check for well-formed UTF-8 without noncharacters; exit 1 if not."""
    ok = is_valid(_buffer(text, hex_input))
    log.info("cli.valid", valid=ok)
    _emit(ok)
    if not ok:
        raise typer.Exit(1)


@app.command()
def printable(text: str, hex_input: bool = HEX_INPUT) -> None:
    """Check every codepoint is printable; exit 1 if not."""
    ok = is_printable(_buffer(text, hex_input))
    log.info("cli.printable", printable=ok)
    _emit(ok)
    if not ok:
        raise typer.Exit(1)


@app.command()
def chunk(
    text: str,
    trait: str = typer.Option("valid", "--trait", help="valid|printable"),
    hex_input: bool = HEX_INPUT,
) -> None:
    """Split into maximal runs that agree on TRAIT."""
    try:
        chunks = chunk_buffer(_buffer(text, hex_input), trait)
    except ArgumentError as e:
        _fail(e)
    log.info("cli.chunk", trait=trait, chunks=len(chunks))
    _emit([_show(piece) for piece in chunks])


@app.command()
def normalize(
    text: str,
    form: str = typer.Option("nfc", "--form", help="nfc|nfd|nfkc|nfkd"),
    hex_input: bool = HEX_INPUT,
) -> None:
    """Apply a Unicode normalization form."""
    try:
        result = normalize_buffer(_buffer(text, hex_input), form)
    except ArgumentError as e:
        _fail(e)
    log.info("cli.normalize", form=form, bytes=len(result))
    _emit(_show(result))


if __name__ == "__main__":
    app()
