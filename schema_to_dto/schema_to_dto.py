import logging

import click

from .errors import SchemaToDtoError
from .pipeline import CodeGeneratorConfig, OutputMode, PipelineGenerator, load_document
from .pipeline.modifiers import loader
from .pipeline.schema_ast import summarize

logger = logging.getLogger(__name__)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True),
              help="Modifier configuration file (.yml, .yaml or .json)")
@click.option("--namespace", "-n", default=None, type=str, help="Namespace of the generated types")
@click.option("--enum-types", is_flag=True, default=False, help="Generate enums and constants classes")
@click.option("--nullable", is_flag=True, default=False, help="Mark optional properties as nullable")
@click.option("--required-keyword", is_flag=True, default=False, help="Use the `required` keyword")
@click.option("--system-text-json", is_flag=True, default=False, help="Emit System.Text.Json attributes")
@click.option("--template-dir", default=None, type=click.Path(exists=True, file_okay=False, resolve_path=True),
              help="Directory with custom templates")
@click.option("--force", is_flag=True, default=False, help="Overwrite existing output files")
@click.option("--strict", is_flag=True, default=False, help="Fail on invalid configuration paths")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("input_path", metavar="INPUT", type=click.Path(exists=True, resolve_path=True))
@click.argument("output_dir", type=click.Path(file_okay=False, resolve_path=True))
def schema_to_dto(
    config,
    namespace,
    enum_types,
    nullable,
    required_keyword,
    system_text_json,
    template_dir,
    force,
    strict,
    verbose,
    input_path,
    output_dir,
):
    """Generate DTO and validator classes from a Swagger 2.0 file or a JSON Schema directory."""
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING, format="%(levelname)s: %(message)s")

    gen_config = CodeGeneratorConfig(
        generate_enum_types=enum_types,
        use_nullable_reference_types=nullable,
        use_required_keyword=required_keyword,
        use_system_text_json=system_text_json,
        template_dir=template_dir or "",
        output_mode=OutputMode.FORCE if force else OutputMode.ERROR_IF_EXISTS,
    )
    if namespace is not None:
        gen_config.namespace = namespace

    try:
        modifier_config = loader.load(config) if config is not None else None
        document = load_document(input_path)
        logger.info(summarize(document))

        generator = PipelineGenerator(gen_config, modifier_config)
        result = generator.generate(document)

        if result.path_errors and strict:
            details = "\n".join(f"  {error}" for error in result.path_errors)
            raise click.ClickException(f"Invalid property paths in configuration:\n{details}")

        written = generator.write(result, output_dir)
    except SchemaToDtoError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Generated {len(written)} files in {output_dir}")
