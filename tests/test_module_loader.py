from pathlib import Path

import pytest

from questlang.data.errors import ModuleLoadError, ParseError, SourceLoadError
from questlang.data.host import FileSystemHost, InMemoryHost
from questlang.data.module_loader import ModuleLoader, VisitState
from tests.helpers.quest_sources import (
    LOCATIONS_MODULE,
    MODULE_QUEST,
    cyclic_module_files,
    write_files,
)


class CountingHost(InMemoryHost):
    def __init__(self, files) -> None:
        super().__init__(files)
        self.reads: list[str] = []

    def read_file(self, path: str) -> str:
        self.reads.append(path)
        return super().read_file(path)


def test_loads_quest_and_imported_module() -> None:
    host = InMemoryHost({"/q/main.ql": MODULE_QUEST, "/q/loc.ql": LOCATIONS_MODULE})
    loader = ModuleLoader(host)

    result = loader.load_quest("/q/main.ql")

    assert result.program.name == "Модульный"
    assert [m.name for m in result.modules] == ["Локации"]
    assert result.modules[0].file == "/q/loc.ql"
    assert loader.get_module_by_file("/q/loc.ql") is result.modules[0]
    assert loader.get_module_by_name("Локации") is result.modules[0]


def test_cyclic_imports_register_each_file_once() -> None:
    host = CountingHost(cyclic_module_files())
    loader = ModuleLoader(host)

    result = loader.load_quest("/quests/main.ql")

    assert [m.name for m in result.modules] == ["A", "B"]
    assert sorted(host.reads) == ["/quests/a.ql", "/quests/b.ql", "/quests/main.ql"]
    assert loader._visit == {
        "/quests/a.ql": VisitState.VISITED,
        "/quests/b.ql": VisitState.VISITED,
    }


def test_self_import_is_a_harmless_cycle() -> None:
    host = InMemoryHost(
        {
            "/m/self.ql": 'module Self; import Self from "./self.ql"; nodes { x: { type: ending; } } export [x];',
            "/m/main.ql": 'quest Q; goal "g"; import Self from "./self.ql"; graph { nodes { s: { type: initial; transitions: [@Self.x]; } } start: s; } end;',
        }
    )
    loader = ModuleLoader(host)

    result = loader.load_quest("/m/main.ql")

    assert [m.name for m in result.modules] == ["Self"]


def test_shared_dependency_parsed_once() -> None:
    host = CountingHost(
        {
            "/d/main.ql": 'quest Q; goal "g"; import L from "./l.ql"; import R from "./r.ql"; graph { } end;',
            "/d/l.ql": 'module L; import S from "./shared/s.ql";',
            "/d/r.ql": 'module R; import S from "./shared/s.ql";',
            "/d/shared/s.ql": "module S;",
        }
    )
    loader = ModuleLoader(host)

    result = loader.load_quest("/d/main.ql")

    assert [m.name for m in result.modules] == ["L", "S", "R"]
    assert host.reads.count("/d/shared/s.ql") == 1


def test_deep_import_chain_does_not_recurse() -> None:
    depth = 2000
    files = {"/c/main.ql": 'quest Q; goal "g"; import M0 from "./m0.ql"; graph { } end;'}
    for index in range(depth):
        files[f"/c/m{index}.ql"] = f'module M{index}; import M{index + 1} from "./m{index + 1}.ql";'
    files[f"/c/m{depth}.ql"] = f"module M{depth};"
    loader = ModuleLoader(InMemoryHost(files))

    result = loader.load_quest("/c/main.ql")

    assert len(result.modules) == depth + 1


def test_resolve_export_reasons() -> None:
    host = InMemoryHost(
        {
            "/r/main.ql": 'quest Q; goal "g"; import M from "./m.ql"; graph { } end;',
            "/r/m.ql": "module M; nodes { open: { type: ending; } secret: { type: ending; } } export [open];",
        }
    )
    loader = ModuleLoader(host)
    loader.load_quest("/r/main.ql")

    assert loader.resolve_export("M", "open").ok
    missing_module = loader.resolve_export("Nope", "open")
    assert not missing_module.ok
    assert missing_module.error == "Module 'Nope' not found"
    assert loader.resolve_export("M", "ghost").error == "Module 'M' has no node 'ghost'"
    assert loader.resolve_export("M", "secret").error == "Node 'secret' is not exported by module 'M'"


def test_validate_modules_reports_missing_exports() -> None:
    host = InMemoryHost(
        {
            "/v/main.ql": 'quest Q; goal "g"; import M from "./m.ql"; graph { } end;',
            "/v/m.ql": "module M; nodes { a: { type: ending; } } export [a, ghost];",
        }
    )
    loader = ModuleLoader(host)
    loader.load_quest("/v/main.ql")

    report = loader.validate_modules()

    assert not report.is_valid
    assert report.errors == ["Module M: exported node 'ghost' does not exist"]


def test_name_collision_first_registered_wins() -> None:
    host = InMemoryHost(
        {
            "/n/main.ql": 'quest Q; goal "g"; import M from "./one.ql"; import M from "./two.ql"; graph { } end;',
            "/n/one.ql": "module M; nodes { a: { type: ending; } } export [a];",
            "/n/two.ql": "module M; nodes { b: { type: ending; } } export [b];",
        }
    )
    loader = ModuleLoader(host)
    result = loader.load_quest("/n/main.ql")

    assert len(result.modules) == 2
    assert loader.get_module_by_name("M").file == "/n/one.ql"
    assert loader.resolve_export("M", "a").ok
    assert not loader.resolve_export("M", "b").ok
    report = loader.validate_modules()
    assert report.is_valid
    assert report.warnings == ["Module name 'M' in /n/two.ql is shadowed by /n/one.ql"]


def test_importing_a_quest_file_fails() -> None:
    host = InMemoryHost(
        {
            "/x/main.ql": 'quest Q; goal "g"; import M from "./other.ql"; graph { } end;',
            "/x/other.ql": 'quest Other; goal "g"; graph { } end;',
        }
    )

    with pytest.raises(ModuleLoadError, match="Expected module in /x/other.ql"):
        ModuleLoader(host).load_quest("/x/main.ql")


def test_missing_module_file_surfaces_host_error() -> None:
    host = InMemoryHost({"/q/main.ql": MODULE_QUEST})

    with pytest.raises(SourceLoadError, match="File not found: /q/loc.ql"):
        ModuleLoader(host).load_quest("/q/main.ql")


def test_module_parse_error_propagates() -> None:
    host = InMemoryHost({"/q/main.ql": MODULE_QUEST, "/q/loc.ql": "module ;"})

    with pytest.raises(ParseError, match="Expected module name"):
        ModuleLoader(host).load_quest("/q/main.ql")


def test_file_system_host_loads_cycle_from_disk(tmp_path: Path) -> None:
    write_files(tmp_path, {name.removeprefix("/quests/"): text for name, text in cyclic_module_files().items()})
    loader = ModuleLoader(FileSystemHost())

    result = loader.load_quest(str(tmp_path / "main.ql"))

    assert {Path(m.file).name for m in result.modules} == {"a.ql", "b.ql"}
    assert all(Path(m.file).is_absolute() for m in result.modules)


def test_file_system_host_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SourceLoadError, match="File not found"):
        FileSystemHost().read_file(str(tmp_path / "absent.ql"))


def test_in_memory_host_resolves_relative_paths() -> None:
    host = InMemoryHost()

    assert host.resolve("/a/b/main.ql", "../c/mod.ql") == "/a/c/mod.ql"
    assert host.resolve("main.ql", "./mod.ql") == "/mod.ql"


def test_validate_modules_reports_unresolved_cross_module_targets() -> None:
    host = InMemoryHost(
        {
            "/x/main.ql": 'quest Q; goal "g"; import M from "./m.ql"; graph { nodes { s: { type: ending; } } start: s; } end;',
            "/x/m.ql": 'module M; nodes { a: { options: [("x", @Gone.b), ("y", gone)]; } } export [a];',
        }
    )
    loader = ModuleLoader(host)
    loader.load_quest("/x/main.ql")

    report = loader.validate_modules()

    assert report.errors == [
        "Module M: node 'a' references '@Gone.b': Module 'Gone' not found",
        "Module M: node 'a' references '@M.gone': Module 'M' has no node 'gone'",
    ]
