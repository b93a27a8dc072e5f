import json
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Type, Union

from pydantic import BaseModel

from datamodels import Projection, SymbolCounts
from extractor.base import Row, SymbolNormalizer
from extractor.raw_normalizer import RawSymbolNormalizer
from extractor.standard_normalizer import StandardSymbolNormalizer
from logger import logger
from port_resolver import resolve_port
from query_client import EngineClient, endpoint_for
from settings import DEFAULT_PROCESS_NAME

NORMALIZERS: Dict[Projection, Type[SymbolNormalizer]] = {
    Projection.STANDARD: StandardSymbolNormalizer,
    Projection.RAW: RawSymbolNormalizer,
}


def get_normalizer(projection: Union[Projection, str]) -> SymbolNormalizer:
    return NORMALIZERS[Projection(projection)]()


def normalize(
    functions_rows: Iterable[Row],
    types_rows: Iterable[Row],
    enum_rows: Iterable[Row],
    projection: Union[Projection, str] = Projection.STANDARD,
) -> Any:
    """Normalizes the three metadata result sets into the document of `projection`."""
    return get_normalizer(projection).normalize(functions_rows, types_rows, enum_rows)


def collect_document(client: EngineClient, normalizer: SymbolNormalizer) -> Any:
    """
    Queries the engine behind `client` and normalizes what it returns.

    The open catalog is refreshed before anything is read so the metadata
    tables reflect the current document.

    Args:
        client (EngineClient): Client bound to the engine endpoint.
        normalizer (SymbolNormalizer): Decides the output projection.

    Returns:
        The normalized document (a symbol list or a RawDocument).
    """
    catalog = client.lookup_catalog()
    client.refresh_catalog(catalog)

    functions_rows = client.fetch_functions()
    types_rows = client.fetch_types()
    enum_rows = client.fetch_enum_options()

    return normalizer.normalize(functions_rows, types_rows, enum_rows)


def document_to_json_data(document: Any) -> Union[List[Any], Dict[str, Any]]:
    if isinstance(document, BaseModel):
        return document.model_dump(mode="json", by_alias=True)
    return [symbol.model_dump(mode="json", by_alias=True) for symbol in document]


def save_document_to_json(document: Any, output_path: Union[str, Path]):
    """
    Saves a normalized document to a JSON file, replacing any existing file.

    The JSON goes to a temporary file beside the target, which then replaces
    the target in one step. A failed run leaves any previous file intact.

    Args:
        document: Output of a `SymbolNormalizer`.
        output_path (str | Path): Where to write the JSON file
    """
    output_path = Path(output_path)
    text = json.dumps(document_to_json_data(document), indent=2, ensure_ascii=False)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf8", dir=output_path.parent, prefix=f".{output_path.name}.",
        suffix=".tmp", delete=False,
    ) as tmp:
        tmp_path = Path(tmp.name)
    try:
        tmp_path.write_text(text, encoding="utf8")
        os.replace(tmp_path, output_path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.info(f"Saved {output_path}")


def run_extraction(
    normalizer: SymbolNormalizer,
    port: int = 0,
    output_path: Union[str, Path] = "output.json",
    host: str = "localhost",
    process_name: str = DEFAULT_PROCESS_NAME,
    client_factory: Callable[[str], EngineClient] = EngineClient,
) -> SymbolCounts:
    """
    Runs the whole pipeline: find the engine, query it, normalize, write.

    Args:
        normalizer (SymbolNormalizer): Decides the output projection.
        port (int): Engine port, 0 to detect it from the running process.
        output_path (str | Path): Where to write the JSON file.
        host (str): Engine host.
        process_name (str): Engine executable name used for detection.
        client_factory: Builds the query client for an endpoint.

    Returns:
        SymbolCounts: How many functions, types and enums were written.
    """
    resolved_port = resolve_port(port, process_name)
    client = client_factory(endpoint_for(resolved_port, host))

    document = collect_document(client, normalizer)
    save_document_to_json(document, output_path)

    counts = normalizer.count(document)
    logger.info(
        f"Extracted {counts.functions} functions, {counts.types} types "
        f"and {counts.enums} enums ({normalizer.projection.value} projection)"
    )
    return counts
