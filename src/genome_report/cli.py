"""genome-report: consumer genotype analysis against ClinVar and SNPedia."""

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import ConfigValidationError, ReportConfig, load_config, validate_config
from .models import Mutation
from .prs import PRSAssetError, PRSResult
from .references import ReferenceLoadError
from .risk import ASCVDRiskFactors
from .utils.validators import ValidationError, validate_rsid


def version_callback(value: bool) -> None:
    if value:
        print(__version__)
        raise typer.Exit()


app = typer.Typer(
    name="genome-report",
    help="Annotate consumer genotype files with ClinVar, SNPedia, PRS and ASCVD risk",
)
console = Console()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version and exit"
        ),
    ] = None,
) -> None:
    pass


def setup_logging(verbose: bool, quiet: bool) -> None:
    """Configure logging based on verbosity flags."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("genome_report").setLevel(level)


def _resolve_settings(config_file: Path | None, overrides: dict[str, Any]) -> ReportConfig:
    """Merge an optional TOML config with command-line overrides.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigValidationError: If any value is invalid
    """
    if config_file is not None:
        return load_config(config_file, overrides)

    values = {k: v for k, v in overrides.items() if v is not None}
    validate_config(values)
    return ReportConfig(**values)


def _load_references(settings: ReportConfig) -> tuple[dict, dict]:
    """Load the ClinVar and SNPedia lookups named in settings."""
    from .references import load_clinvar_database, load_json_source, load_snpedia_database

    if not settings.clinvar or not settings.snpedia:
        raise ConfigValidationError(
            "Both ClinVar and SNPedia sources are required (--clinvar/--snpedia or --config)"
        )

    clinvar_data = load_json_source(settings.clinvar, cache_dir=settings.cache_dir)
    if not isinstance(clinvar_data, list):
        raise ReferenceLoadError(f"ClinVar export must be a JSON array: {settings.clinvar}")

    snpedia_data = load_json_source(settings.snpedia, cache_dir=settings.cache_dir)
    if not isinstance(snpedia_data, dict):
        raise ReferenceLoadError(f"SNPedia export must be a JSON object: {settings.snpedia}")

    return (
        load_clinvar_database(clinvar_data),
        load_snpedia_database(snpedia_data, description_limit=settings.description_limit),
    )


def _read_genome(genome_path: Path) -> str:
    if not genome_path.exists():
        raise FileNotFoundError(f"Genome file not found: {genome_path}")
    return genome_path.read_text(encoding="utf-8", errors="replace")


def _build_risk_factors(
    age: float | None,
    male: bool,
    black: bool,
    smoker: bool,
    diabetic: bool,
    hypertensive: bool,
    sbp: float | None,
    total_cholesterol: float | None,
    hdl: float | None,
) -> ASCVDRiskFactors | None:
    if age is None:
        return None

    measurements = (
        ("--sbp", sbp),
        ("--total-cholesterol", total_cholesterol),
        ("--hdl", hdl),
    )
    missing = [flag for flag, value in measurements if value is None]
    if missing:
        raise ValidationError(f"ASCVD risk requires {', '.join(missing)}")

    for flag, value in measurements:
        if value <= 0:
            raise ValidationError(f"{flag} must be positive, got {value:g}")

    return ASCVDRiskFactors(
        age=age,
        is_male=male,
        is_black=black,
        is_smoker=smoker,
        is_diabetic=diabetic,
        is_hypertensive=hypertensive,
        systolic_blood_pressure=sbp,
        total_cholesterol=total_cholesterol,
        hdl=hdl,
    )


def _mutations_table(mutations: list[Mutation]) -> Table:
    table = Table(title="Variants of Interest", border_style="cyan")
    table.add_column("rsID", style="bold yellow", no_wrap=True)
    table.add_column("Source")
    table.add_column("Gene", style="green", no_wrap=True)
    table.add_column("Condition")
    table.add_column("Call", justify="center")
    table.add_column("Code", justify="right")
    table.add_column("Evidence")
    table.add_column("Magnitude", justify="right")

    for m in mutations:
        table.add_row(
            m.rsid,
            m.source,
            m.gene_name,
            m.phenotype,
            m.user_allele or "",
            str(m.genotype),
            m.evidence_level,
            m.magnitude or "",
        )
    return table


def _print_prs_results(results: list[PRSResult]) -> None:
    table = Table(title="Polygenic Risk Scores", border_style="cyan")
    table.add_column("Model", style="bold")
    table.add_column("PGS ID")
    table.add_column("Score", justify="right")
    table.add_column("Risk")

    colors = {"high": "red", "normal": "green", "low": "green"}
    for r in results:
        if r.is_classified:
            color = colors.get(r.risk, "white")
            risk = f"[{color}]{r.risk}[/{color}]"
        else:
            risk = "unclassified"
        table.add_row(r.name, r.pgs_id or "", f"{r.score:.4f}", risk)
    console.print(table)


@app.command()
def analyze(
    genome_path: Path = typer.Argument(..., help="Consumer genotype export (23andMe etc.)"),
    clinvar: Annotated[
        str | None, typer.Option("--clinvar", help="ClinVar export (path or URL)")
    ] = None,
    snpedia: Annotated[
        str | None, typer.Option("--snpedia", help="SNPedia export (path or URL)")
    ] = None,
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="TOML configuration file")
    ] = None,
    rsids: Annotated[
        list[str] | None, typer.Option("--rsid", help="Only show these rsids (repeatable)")
    ] = None,
    limit: Annotated[
        int | None, typer.Option("--limit", "-n", help="Maximum number of rows to show")
    ] = None,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write JSON to file")
    ] = None,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Match a genotype file against ClinVar and SNPedia.

    Example:
        genome-report analyze genome.txt --clinvar clinvar.json --snpedia snpedia.json
    """
    from .matching import convert_to_mutations, find_shared_variants
    from .parsers import parse_genome_file

    setup_logging(verbose, quiet)

    try:
        wanted = {validate_rsid(r) for r in rsids} if rsids else None
        settings = _resolve_settings(config_file, {"clinvar": clinvar, "snpedia": snpedia})
        content = _read_genome(genome_path)
        clinvar_map, snpedia_map = _load_references(settings)
    except (
        ConfigValidationError,
        ReferenceLoadError,
        ValidationError,
        FileNotFoundError,
    ) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    user_variants = parse_genome_file(content)
    mutations = convert_to_mutations(
        find_shared_variants(user_variants, clinvar_map, snpedia_map)
    )

    if wanted is not None:
        mutations = [m for m in mutations if m.rsid.lower() in wanted]
    if limit is not None:
        mutations = mutations[:limit]

    if output:
        output.write_text(json.dumps([m.to_dict() for m in mutations], indent=2))
        if not quiet:
            console.print(f"[green]✓ Wrote {len(mutations)} variants to {output}[/green]")

    if json_output:
        print(json.dumps([m.to_dict() for m in mutations], indent=2))
    elif not output:
        if not mutations:
            console.print("[yellow]No variants of interest found[/yellow]")
        else:
            console.print(_mutations_table(mutations))
            if not quiet:
                console.print(
                    f"{len(mutations)} variants of interest from {len(user_variants):,} calls"
                )


@app.command()
def prs(
    genome_path: Path = typer.Argument(..., help="Consumer genotype export"),
    prs_config: Annotated[
        str | None, typer.Option("--prs-config", help="PRS model configuration JSON")
    ] = None,
    weights: Annotated[
        str | None, typer.Option("--weights", help="PRS weight tables JSON")
    ] = None,
    index_map: Annotated[
        str | None, typer.Option("--index-map", help="rsid to weight index JSON")
    ] = None,
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="TOML configuration file")
    ] = None,
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Calculate polygenic risk scores for a genotype file."""
    from .parsers import parse_genome_file
    from .prs import calculate_all_prs, load_prs_assets

    setup_logging(verbose, quiet)

    try:
        settings = _resolve_settings(
            config_file,
            {"prs_config": prs_config, "prs_weights": weights, "prs_index_map": index_map},
        )
        if not settings.has_prs_assets:
            raise ConfigValidationError(
                "PRS needs --prs-config, --weights and --index-map (or a config file)"
            )
        content = _read_genome(genome_path)
        assets = load_prs_assets(
            settings.prs_config,
            settings.prs_weights,
            settings.prs_index_map,
            cache_dir=settings.cache_dir,
        )
        results = calculate_all_prs(
            parse_genome_file(content), assets.index_map, assets.configs, assets.weights
        )
    except (ConfigValidationError, ReferenceLoadError, PRSAssetError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if json_output:
        print(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        _print_prs_results(results)


@app.command()
def ascvd(
    age: Annotated[float, typer.Option("--age", help="Age in years (40-79)")],
    sbp: Annotated[float, typer.Option("--sbp", help="Systolic blood pressure (mmHg)")],
    total_cholesterol: Annotated[
        float, typer.Option("--total-cholesterol", help="Total cholesterol (mg/dL)")
    ],
    hdl: Annotated[float, typer.Option("--hdl", help="HDL cholesterol (mg/dL)")],
    male: bool = typer.Option(True, "--male/--female", help="Sex"),
    black: bool = typer.Option(False, "--black/--not-black", help="African American"),
    smoker: bool = typer.Option(False, "--smoker/--non-smoker", help="Current smoker"),
    diabetic: bool = typer.Option(False, "--diabetic/--non-diabetic", help="Diabetes"),
    hypertensive: bool = typer.Option(
        False, "--hypertensive/--not-hypertensive", help="On blood pressure treatment"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Calculate 10-year ASCVD risk with the Pooled Cohort Equations."""
    from .risk import MAX_AGE, MIN_AGE, calculate_ascvd_risk

    setup_logging(verbose, quiet)

    try:
        factors = _build_risk_factors(
            age, male, black, smoker, diabetic, hypertensive, sbp, total_cholesterol, hdl
        )
    except ValidationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None
    risk = calculate_ascvd_risk(factors)

    if json_output:
        print(json.dumps({"ascvd_risk": risk}, indent=2))
    elif risk is None:
        console.print(
            f"[yellow]ASCVD risk is undefined for age {age:g} "
            f"(valid range {MIN_AGE}-{MAX_AGE})[/yellow]"
        )
    else:
        console.print(f"10-year ASCVD risk: [bold]{risk:.1f}%[/bold]")


@app.command()
def report(
    genome_path: Path = typer.Argument(..., help="Consumer genotype export"),
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="TOML configuration file")
    ] = None,
    clinvar: Annotated[
        str | None, typer.Option("--clinvar", help="ClinVar export (path or URL)")
    ] = None,
    snpedia: Annotated[
        str | None, typer.Option("--snpedia", help="SNPedia export (path or URL)")
    ] = None,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write report JSON to file")
    ] = None,
    age: Annotated[float | None, typer.Option("--age", help="Age for ASCVD risk")] = None,
    sbp: Annotated[float | None, typer.Option("--sbp", help="Systolic blood pressure")] = None,
    total_cholesterol: Annotated[
        float | None, typer.Option("--total-cholesterol", help="Total cholesterol (mg/dL)")
    ] = None,
    hdl: Annotated[float | None, typer.Option("--hdl", help="HDL cholesterol (mg/dL)")] = None,
    male: bool = typer.Option(True, "--male/--female", help="Sex"),
    black: bool = typer.Option(False, "--black/--not-black", help="African American"),
    smoker: bool = typer.Option(False, "--smoker/--non-smoker", help="Current smoker"),
    diabetic: bool = typer.Option(False, "--diabetic/--non-diabetic", help="Diabetes"),
    hypertensive: bool = typer.Option(
        False, "--hypertensive/--not-hypertensive", help="On blood pressure treatment"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Generate a full JSON report: variants, findings, PRS and ASCVD risk.

    PRS is included when the config names all three PRS assets; ASCVD risk
    is included when --age is given.
    """
    from .prs import load_prs_assets
    from .report import generate_report

    setup_logging(verbose, quiet)

    try:
        factors = _build_risk_factors(
            age, male, black, smoker, diabetic, hypertensive, sbp, total_cholesterol, hdl
        )
        settings = _resolve_settings(config_file, {"clinvar": clinvar, "snpedia": snpedia})
        content = _read_genome(genome_path)
        clinvar_map, snpedia_map = _load_references(settings)
        assets = None
        if settings.has_prs_assets:
            assets = load_prs_assets(
                settings.prs_config,
                settings.prs_weights,
                settings.prs_index_map,
                cache_dir=settings.cache_dir,
            )
        result = generate_report(content, clinvar_map, snpedia_map, assets, factors)
    except (
        ConfigValidationError,
        ReferenceLoadError,
        PRSAssetError,
        ValidationError,
        FileNotFoundError,
    ) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    report_json = json.dumps(result.to_dict(), indent=2)
    if output:
        output.write_text(report_json)
        if not quiet:
            console.print(f"[green]✓ Report written to {output}[/green]")
            console.print(f"  Vendor: {result.vendor}")
            console.print(f"  Genotype calls: {result.variant_count:,}")
            console.print(f"  Variants of interest: {len(result.mutations)}")
            console.print(f"  Findings: {len(result.findings)}")
    else:
        print(report_json)


if __name__ == "__main__":
    app()
