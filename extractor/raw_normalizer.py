from typing import Iterable, List

from .base import Row, SymbolNormalizer
from .rows import decode_embedded_json, is_blank, unqualify_row
from datamodels import (
    Projection,
    RawDocument,
    RawEnumOptionRecord,
    RawFunctionRecord,
    RawTypeRecord,
    SymbolCounts,
)


class RawSymbolNormalizer(SymbolNormalizer):
    """
    Passthrough projection.

    Rows keep every source column under its un-qualified name. Only the
    embedded JSON columns are decoded; return types and required counts are
    left exactly as the engine returned them, and enum options stay one
    record per row.
    """

    @property
    def projection(self) -> Projection:
        return Projection.RAW

    def normalize(
        self,
        functions_rows: Iterable[Row],
        types_rows: Iterable[Row],
        enum_rows: Iterable[Row],
    ) -> RawDocument:
        return RawDocument(
            functions=self.normalize_functions(functions_rows),
            types=self.normalize_types(types_rows),
            enum_options=self.normalize_enum_options(enum_rows),
        )

    def normalize_functions(self, rows: Iterable[Row]) -> List[RawFunctionRecord]:
        records: List[RawFunctionRecord] = []
        for raw_row in rows:
            row = unqualify_row(raw_row)
            name = row.get("Name")
            if is_blank(name):
                continue

            row["Name"] = str(name)
            row["Documentation"] = decode_embedded_json(row, "Documentation", name)
            row["Parameters"] = decode_embedded_json(row, "Parameters", name)
            records.append(RawFunctionRecord.model_validate(row))
        return records

    def normalize_types(self, rows: Iterable[Row]) -> List[RawTypeRecord]:
        records: List[RawTypeRecord] = []
        for raw_row in rows:
            row = unqualify_row(raw_row)
            name = row.get("FullName")
            if is_blank(name):
                continue

            row["FullName"] = str(name)
            row["Documentation"] = decode_embedded_json(row, "Documentation", name)
            records.append(RawTypeRecord.model_validate(row))
        return records

    def normalize_enum_options(self, rows: Iterable[Row]) -> List[RawEnumOptionRecord]:
        return [
            RawEnumOptionRecord.model_validate(row)
            for row in map(unqualify_row, rows)
            if not is_blank(row.get("Option"))
        ]

    def count(self, document: RawDocument) -> SymbolCounts:
        return SymbolCounts(
            functions=len(document.functions),
            types=len(document.types),
            enums=len(document.enum_options),
        )
