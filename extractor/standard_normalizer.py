from typing import Dict, Iterable, List

from .base import Row, SymbolNormalizer
from .rows import (
    ANY_TYPE,
    LegacyParameterList,
    ParameterMapping,
    ParameterSpec,
    decode_documentation,
    decode_embedded_json,
    is_blank,
    to_parameter_spec,
    to_required_count,
    unqualify_row,
)
from datamodels import (
    Documentation,
    EnumOption,
    EnumSymbol,
    FunctionSymbol,
    ParameterDescriptor,
    Projection,
    Symbol,
    SymbolCounts,
    TypeSymbol,
)

DATA_SOURCE_CATEGORY = "Accessing data"


def describe_parameter(name: str, type_name: str, required: bool) -> str:
    description = f"{name} ({type_name})"
    return description if required else f"{description}, optional"


def build_parameters(spec: ParameterSpec, required_count: int) -> List[ParameterDescriptor]:
    """
    Builds parameter descriptors in declared order.

    Args:
        spec (ParameterSpec): Decoded parameter shape of one function.
        required_count (int): Leading parameters that are required.

    Returns:
        List[ParameterDescriptor]: One descriptor per parameter; the Nth is required iff N < required_count.
    """
    if isinstance(spec, ParameterMapping):
        typed = [
            (name, ANY_TYPE if is_blank(type_name) else str(type_name))
            for name, type_name in spec.types_by_name.items()
        ]
    elif isinstance(spec, LegacyParameterList):
        typed = [(name, ANY_TYPE) for name in spec.names]
    else:
        raise TypeError(f"Unknown parameter shape: {type(spec).__name__}")

    parameters: List[ParameterDescriptor] = []
    for position, (name, type_name) in enumerate(typed):
        required = position < required_count
        parameters.append(ParameterDescriptor(
            name=name,
            type=type_name,
            is_required=required,
            is_nullable=not required,
            description=describe_parameter(name, type_name, required),
        ))
    return parameters


class StandardSymbolNormalizer(SymbolNormalizer):
    """Flat symbol list: functions, then types, then enums grouped by name."""

    @property
    def projection(self) -> Projection:
        return Projection.STANDARD

    def normalize(
        self,
        functions_rows: Iterable[Row],
        types_rows: Iterable[Row],
        enum_rows: Iterable[Row],
    ) -> List[Symbol]:
        symbols: List[Symbol] = []
        symbols.extend(self.normalize_functions(functions_rows))
        symbols.extend(self.normalize_types(types_rows))
        symbols.extend(self.normalize_enums(enum_rows))
        return symbols

    def normalize_functions(self, rows: Iterable[Row]) -> List[FunctionSymbol]:
        functions: List[FunctionSymbol] = []
        for raw_row in rows:
            row = unqualify_row(raw_row)
            name = row.get("Name")
            if is_blank(name):
                continue

            documentation = Documentation.model_validate(decode_documentation(row, name))
            spec = to_parameter_spec(decode_embedded_json(row, "Parameters", name), name)
            required_count = to_required_count(row.get("RequiredParameterCount"), name)
            return_type = row.get("ReturnType")

            functions.append(FunctionSymbol(
                name=str(name),
                documentation=documentation.summary(),
                parameters=build_parameters(spec, required_count),
                return_type=ANY_TYPE if is_blank(return_type) else str(return_type).lower(),
                is_data_source=documentation.category == DATA_SOURCE_CATEGORY,
            ))
        return functions

    def normalize_types(self, rows: Iterable[Row]) -> List[TypeSymbol]:
        types: List[TypeSymbol] = []
        for raw_row in rows:
            row = unqualify_row(raw_row)
            name = row.get("FullName")
            if is_blank(name):
                continue

            documentation = Documentation.model_validate(decode_documentation(row, name))
            types.append(TypeSymbol(
                name=str(name),
                base_type=row.get("BaseType"),
                documentation=documentation.summary(),
                allowed_values=documentation.allowed_values,
            ))
        return types

    def normalize_enums(self, rows: Iterable[Row]) -> List[EnumSymbol]:
        # Every row opens its group, even when its option is empty.
        groups: Dict[str, List[EnumOption]] = {}
        for raw_row in rows:
            row = unqualify_row(raw_row)
            enum_name = row.get("Enum")
            options = groups.setdefault("" if enum_name is None else str(enum_name), [])

            option = row.get("Option")
            if is_blank(option):
                continue
            options.append(EnumOption(
                name=str(option),
                full_name=row.get("FullOption"),
                value=row.get("Value"),
            ))

        return [EnumSymbol(name=name, options=options) for name, options in groups.items()]

    def count(self, document: List[Symbol]) -> SymbolCounts:
        return SymbolCounts(
            functions=sum(1 for s in document if isinstance(s, FunctionSymbol)),
            types=sum(1 for s in document if isinstance(s, TypeSymbol)),
            enums=sum(1 for s in document if isinstance(s, EnumSymbol)),
        )
