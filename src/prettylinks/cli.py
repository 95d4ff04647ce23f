import logging
import typer
from pathlib import Path
from typing import List, Optional

from .config import find_rules_file
from .core.rules import RuleSet
from .errors import RuleIndexError, RuleStoreError

app = typer.Typer(add_completion=False)
rules_app = typer.Typer(add_completion=False, help="Inspect and edit the link title rules.")
app.add_typer(rules_app, name="rules")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
):
    """
    Rewrite the titles of [[wiki links]] with regex rules.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_rule_set(rules: Optional[Path], start: Optional[Path] = None) -> RuleSet:
    from .utils.store import FileRuleStore

    path = rules if rules is not None else find_rules_file(start)
    try:
        return RuleSet.load(FileRuleStore(path))
    except RuleStoreError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def prettify(
    paths: List[Path] = typer.Argument(..., exists=True, help="Markdown files or directories"),
    rules: Optional[Path] = typer.Option(None, help="Path to rule file (.yaml or .json)"),
    dry_run: bool = typer.Option(False, help="Report changes without writing files")
):
    """
    Add pretty titles to every un-aliased internal link in the given documents.
    """
    from tqdm import tqdm
    from .core.rewriter import prettify_buffer
    from .utils.markdown import MarkdownFileBuffer, collect_markdown_files

    rule_set = _load_rule_set(rules, paths[0])
    files = collect_markdown_files(paths)

    changed_files = 0
    changed_lines = 0
    errors = 0

    for path in tqdm(files, desc="Prettifying links", disable=len(files) < 2):
        buffer = MarkdownFileBuffer.open(path)
        if buffer is None:
            errors += 1
            continue

        changed = prettify_buffer(buffer, rule_set)
        if not changed:
            continue

        if dry_run:
            tqdm.write(f"Would update {path} ({changed} line(s))")
        elif not buffer.save():
            errors += 1
            continue
        changed_files += 1
        changed_lines += changed

    verb = "Would update" if dry_run else "Updated"
    typer.echo(f"{verb} {changed_files}/{len(files)} file(s), {changed_lines} line(s).")
    if errors:
        typer.echo(f"{errors} file(s) could not be processed.", err=True)
        raise typer.Exit(code=1)


@app.command()
def preview(
    text: str = typer.Argument(..., help="Line of text to rewrite"),
    rules: Optional[Path] = typer.Option(None, help="Path to rule file (.yaml or .json)")
):
    """
    Print a line with its link titles rewritten, without touching any file.
    """
    from .core.rewriter import prettify_line

    rule_set = _load_rule_set(rules)
    typer.echo(prettify_line(text, rule_set))


@app.command()
def links(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Markdown file")
):
    """
    List the internal links found in a document.
    """
    from .core.rewriter import iter_wikilinks
    from .utils.markdown import MarkdownFileBuffer

    buffer = MarkdownFileBuffer.open(file)
    if buffer is None:
        raise typer.Exit(code=1)

    for index in range(buffer.line_count()):
        for token in iter_wikilinks(buffer.get_line(index)):
            state = f"alias={token.alias!r}" if token.has_alias else "no alias"
            typer.echo(f"{file}:{index + 1}: {token.target} ({state})")


@rules_app.command("list")
def list_rules(
    rules: Optional[Path] = typer.Option(None, help="Path to rule file (.yaml or .json)")
):
    """
    Show the rules in the order they are applied.
    """
    rule_set = _load_rule_set(rules)
    if not len(rule_set):
        typer.echo("No rules defined.")
        return
    for number, rule in enumerate(rule_set, 1):
        typer.echo(f"{number}. search={rule.search!r} replace={rule.replace!r}")


@rules_app.command("add")
def add_rule(
    search: str = typer.Option("", help="Regular expression to search for"),
    replace: str = typer.Option("", help="Replacement template (\\1, \\g<name>)"),
    rules: Optional[Path] = typer.Option(None, help="Path to rule file (.yaml or .json)")
):
    """
    Append a rule to the end of the pipeline.
    """
    rule_set = _load_rule_set(rules)
    try:
        rule_set.add_rule(search=search, replace=replace)
    except RuleStoreError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Added rule {len(rule_set)}.")


@rules_app.command("set")
def set_rule(
    number: int = typer.Argument(..., help="Rule number as shown by 'rules list'"),
    search: Optional[str] = typer.Option(None, help="New search pattern"),
    replace: Optional[str] = typer.Option(None, help="New replacement template"),
    rules: Optional[Path] = typer.Option(None, help="Path to rule file (.yaml or .json)")
):
    """
    Change the search and/or replace field of an existing rule.
    """
    if search is None and replace is None:
        raise typer.BadParameter("Nothing to change: give --search and/or --replace.")

    rule_set = _load_rule_set(rules)
    try:
        rule_set.update_rule(number - 1, search=search, replace=replace)
    except RuleIndexError:
        raise typer.BadParameter(f"No rule {number}. There are {len(rule_set)} rule(s).")
    except RuleStoreError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Updated rule {number}.")


if __name__ == "__main__":
    app()
