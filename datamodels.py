from enum import Enum
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Projection(str, Enum):
    STANDARD = "standard"
    RAW = "raw"


class SymbolModel(BaseModel):
    """Base for the STANDARD projection; serializes with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Documentation(BaseModel):
    """Decoded documentation record of a function or type.

    The engine emits dotted keys (``Documentation.Description``); bare and
    camelCase spellings are accepted too. Unknown keys are kept as extras.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    description: str | None = Field(
        default=None,
        validation_alias=AliasChoices("Documentation.Description", "Description", "description"),
    )
    long_description: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "Documentation.LongDescription", "LongDescription", "longDescription"
        ),
    )
    category: str | None = Field(
        default=None,
        validation_alias=AliasChoices("Documentation.Category", "Category", "category"),
    )
    allowed_values: Any = Field(
        default=None,
        validation_alias=AliasChoices(
            "Documentation.AllowedValues", "AllowedValues", "allowedValues"
        ),
    )

    def summary(self) -> "DocumentationSummary":
        return DocumentationSummary(
            description=self.description,
            long_description=self.long_description,
            category=self.category,
        )


class DocumentationSummary(SymbolModel):
    description: str | None = None
    long_description: str | None = None
    category: str | None = None


class ParameterDescriptor(SymbolModel):
    name: str
    type: str = "any"
    is_required: bool
    is_nullable: bool
    description: str


class FunctionSymbol(SymbolModel):
    type: Literal["function"] = "function"
    name: str
    documentation: DocumentationSummary
    parameters: list[ParameterDescriptor] = Field(default_factory=list)
    return_type: str = "any"
    is_data_source: bool = False


class TypeSymbol(SymbolModel):
    type: Literal["type"] = "type"
    name: str
    base_type: Any = None
    documentation: DocumentationSummary
    allowed_values: Any = None


class EnumOption(SymbolModel):
    name: str
    full_name: Any = None
    value: Any = None


class EnumSymbol(SymbolModel):
    type: Literal["enum"] = "enum"
    name: str
    options: list[EnumOption] = Field(default_factory=list)


Symbol = FunctionSymbol | TypeSymbol | EnumSymbol


# RAW projection: source columns under their logical names, extras preserved.

class RawRecord(BaseModel):
    model_config = ConfigDict(extra="allow")


class RawFunctionRecord(RawRecord):
    Name: str
    Documentation: Any = None
    Parameters: Any = None
    RequiredParameterCount: Any = None
    ReturnType: Any = None


class RawTypeRecord(RawRecord):
    FullName: str
    BaseType: Any = None
    Documentation: Any = None


class RawEnumOptionRecord(RawRecord):
    Enum: Any = None
    Option: Any
    FullOption: Any = None
    Value: Any = None


class RawDocument(BaseModel):
    functions: list[RawFunctionRecord] = Field(default_factory=list)
    types: list[RawTypeRecord] = Field(default_factory=list)
    enum_options: list[RawEnumOptionRecord] = Field(default_factory=list)


class SymbolCounts(BaseModel):
    functions: int = 0
    types: int = 0
    enums: int = 0
