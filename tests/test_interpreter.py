import pytest

from questlang.core.config import QuestLangConfig
from questlang.core.types import NodeKind
from questlang.data.host import InMemoryHost
from questlang.domain.quest_state import QuestState
from questlang.services.interpreter import QuestInterpreter
from questlang.services.quest_lang import interpret, parse
from tests.helpers.quest_sources import FORK_QUEST, LABYRINTH_QUEST, cyclic_module_files


@pytest.fixture
def interpreter() -> QuestInterpreter:
    return interpret(LABYRINTH_QUEST)


def test_initial_quest_info(interpreter: QuestInterpreter) -> None:
    info = interpreter.get_quest_info()

    assert info.name == "ТестКвест"
    assert info.goal == "Найти выход из лабиринта"
    assert info.is_complete is False


def test_initial_state(interpreter: QuestInterpreter) -> None:
    assert interpreter.get_state() == QuestState("старт", (), False, None)


def test_current_node(interpreter: QuestInterpreter) -> None:
    node = interpreter.get_current_node()

    assert node is not None
    assert node.id == "старт"
    assert node.kind is NodeKind.INITIAL
    assert interpreter.get_available_choices() == []


def test_move_to_node_appends_history(interpreter: QuestInterpreter) -> None:
    result = interpreter.move_to_node("выбор")

    assert result.success
    assert result.error is None
    assert result.new_state.current_node == "выбор"
    assert result.new_state.history == ("старт",)
    assert interpreter.get_state() is result.new_state


def test_history_grows_by_exactly_one_per_move(interpreter: QuestInterpreter) -> None:
    for target in ["выбор", "налево", "выбор", "налево"]:
        before = interpreter.get_state()
        assert interpreter.move_to_node(target).success
        after = interpreter.get_state()
        assert after.history == before.history + (before.current_node,)


def test_move_to_unknown_node_keeps_state(interpreter: QuestInterpreter) -> None:
    before = interpreter.get_state()

    result = interpreter.move_to_node("нигде")

    assert not result.success
    assert result.error == "Target node 'нигде' not found"
    assert interpreter.get_state() is before
    assert result.new_state is before


def test_available_choices_on_action_node(interpreter: QuestInterpreter) -> None:
    interpreter.move_to_node("выбор")
    choices = interpreter.get_available_choices()

    assert [(c.text, c.target) for c in choices] == [("Налево", "налево"), ("Направо", "направо")]


def test_execute_choice(interpreter: QuestInterpreter) -> None:
    interpreter.move_to_node("выбор")

    result = interpreter.execute_choice(0)

    assert result.success
    assert result.new_state.current_node == "налево"
    assert result.new_state.history == ("старт", "выбор")


@pytest.mark.parametrize("index", [-1, 2, 5])
def test_execute_choice_out_of_range(interpreter: QuestInterpreter, index: int) -> None:
    interpreter.move_to_node("выбор")
    before = interpreter.get_state()

    result = interpreter.execute_choice(index)

    assert not result.success
    assert result.error == f"Invalid choice index: {index}. Available choices: 0-1"
    assert interpreter.get_state() is before


def test_execute_choice_on_initial_node(interpreter: QuestInterpreter) -> None:
    result = interpreter.execute_choice(0)

    assert not result.success
    assert result.error == "Cannot execute choice on node type 'initial'"
    assert interpreter.get_state().current_node == "старт"


def test_execute_choice_when_current_node_missing() -> None:
    runner = interpret('quest T; goal "g"; graph { nodes { a: { type: ending; } } start: ghost; } end;')

    result = runner.execute_choice(0)

    assert not result.success
    assert result.error == "Current node 'ghost' not found"


def test_reaching_ending_completes_quest(interpreter: QuestInterpreter) -> None:
    interpreter.move_to_node("направо")
    state = interpreter.get_state()

    assert state.is_complete
    assert state.ending_title == "Ловушка!"
    assert interpreter.get_quest_info().is_complete


def test_leaving_ending_clears_title(interpreter: QuestInterpreter) -> None:
    interpreter.move_to_node("направо")
    interpreter.move_to_node("выбор")

    assert interpreter.get_state().is_complete is False
    assert interpreter.get_state().ending_title is None


def test_reset_is_idempotent(interpreter: QuestInterpreter) -> None:
    interpreter.move_to_node("выбор")
    interpreter.execute_choice(1)

    for _ in range(3):
        interpreter.reset()
        assert interpreter.get_state() == QuestState("старт", (), False, None)


def test_advance_follows_first_transition() -> None:
    runner = interpret(FORK_QUEST)

    result = runner.advance()

    assert result.success
    assert runner.get_state().current_node == "doors"
    assert not runner.advance().success
    assert runner.advance().error == "Cannot auto-advance from node type 'action'"


def test_advance_without_transitions() -> None:
    runner = interpret('quest T; goal "g"; graph { nodes { s: { type: initial; } } start: s; } end;')

    assert runner.advance().error == "Initial node 's' has no transitions"


def test_full_playthrough_to_ending(interpreter: QuestInterpreter) -> None:
    assert interpreter.advance().success
    assert interpreter.execute_choice(0).success
    assert interpreter.execute_choice(0).success

    state = interpreter.get_state()
    assert state.is_complete
    assert state.ending_title == "Победа!"
    assert state.history == ("старт", "выбор", "налево")


def test_no_loader_without_file_path() -> None:
    assert interpret(LABYRINTH_QUEST).get_module_loader() is None


def test_navigates_into_and_through_modules() -> None:
    host = InMemoryHost(cyclic_module_files())
    runner = interpret(host.read_file("/quests/main.ql"), "/quests/main.ql", host)

    assert runner.advance().success
    assert runner.execute_choice(0).success
    assert runner.get_state().current_node == "@A.a"
    assert runner.execute_choice(0).success
    assert runner.get_state().current_node == "@B.b"
    assert runner.execute_choice(1).success

    state = runner.get_state()
    assert state.current_node == "@B.done"
    assert state.is_complete
    assert state.ending_title == "Done"


def test_qualified_move_without_registry_fails() -> None:
    runner = interpret(FORK_QUEST)

    result = runner.move_to_node("@A.a")

    assert not result.success
    assert result.error == "Target node '@A.a' not found"


def test_constructor_accepts_program_directly() -> None:
    runner = QuestInterpreter(parse(FORK_QUEST), config=QuestLangConfig(max_paths=1))

    assert len(runner.get_all_paths()) == 1
