"""Row builders and stand-ins for psutil, pyadomd and the engine client."""

import json
from collections import namedtuple

Address = namedtuple("Address", ["ip", "port"])
Connection = namedtuple("Connection", ["laddr", "status"])
Column = namedtuple("Column", ["name"])


def function_row(name, documentation=None, parameters=None, required=0, return_type=None):
    return {
        "Functions[Name]": name,
        "Functions[Documentation]": None if documentation is None else json.dumps(documentation),
        "Functions[Parameters]": None if parameters is None else json.dumps(parameters),
        "Functions[RequiredParameterCount]": required,
        "Functions[ReturnType]": return_type,
    }


def type_row(full_name, base_type=None, documentation=None):
    return {
        "Types[FullName]": full_name,
        "Types[BaseType]": base_type,
        "Types[Documentation]": None if documentation is None else json.dumps(documentation),
    }


def enum_row(enum, option, full_option=None, value=None):
    return {
        "EnumOptions[Enum]": enum,
        "EnumOptions[Option]": option,
        "EnumOptions[FullOption]": full_option,
        "EnumOptions[Value]": value,
    }


class FakeEngineClient:
    """Stands in for EngineClient, answering from canned rows."""

    def __init__(self, function_rows, type_rows, enum_rows, catalog="model-1234"):
        self.function_rows = function_rows
        self.type_rows = type_rows
        self.enum_rows = enum_rows
        self.catalog = catalog
        self.calls = []

    def lookup_catalog(self):
        self.calls.append("lookup_catalog")
        return self.catalog

    def refresh_catalog(self, catalog):
        self.calls.append(f"refresh_catalog:{catalog}")

    def fetch_functions(self):
        self.calls.append("fetch_functions")
        return self.function_rows

    def fetch_types(self):
        self.calls.append("fetch_types")
        return self.type_rows

    def fetch_enum_options(self):
        self.calls.append("fetch_enum_options")
        return self.enum_rows


class FakeProcess:
    def __init__(self, pid, name, connections=(), error=None):
        self.pid = pid
        self.info = {"pid": pid, "name": name}
        self._connections = list(connections)
        self._error = error

    def net_connections(self, kind="inet"):
        if self._error is not None:
            raise self._error
        return self._connections


def listening(*ports):
    return [Connection(Address("127.0.0.1", port), "LISTEN") for port in ports]


class FakeCursor:
    def __init__(self, results, executed):
        self._results = results
        self._executed = executed
        self.description = []
        self._rows = []

    def execute(self, query):
        self._executed.append(query)
        columns, rows = self._results[query]
        self.description = [Column(name) for name in columns]
        self._rows = rows
        return self

    def execute_nonquery(self, command):
        self._executed.append(command)
        return self

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeConnection:
    """Mimics a pyadomd connection; `results` maps query text to (columns, rows)."""

    def __init__(self, results, executed):
        self._results = results
        self._executed = executed

    def cursor(self):
        return FakeCursor(self._results, self._executed)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        pass


def as_result_set(rows):
    """Turns a list of row dicts into the (columns, tuples) shape a cursor returns."""
    columns = list(rows[0].keys()) if rows else []
    return columns, [tuple(row[column] for column in columns) for row in rows]
