from prompt_refiner.intent.questions import QuestionSelector
from prompt_refiner.slots.registry import SlotRegistry


def test_higher_priority_is_asked_first() -> None:
    questions = QuestionSelector().select(["priority", "core_features"], "dev", 2)

    assert [q.key for q in questions] == ["core_features", "priority"]
    assert questions[0].question == SlotRegistry().question_for("core_features", "dev")


def test_ties_keep_definition_order() -> None:
    questions = QuestionSelector().select(
        ["tech_pref_constraints", "target_users"], "dev", 2
    )

    assert [q.key for q in questions] == ["target_users", "tech_pref_constraints"]


def test_limit_caps_and_dedups() -> None:
    selector = QuestionSelector()
    missing = ["priority", "type", "type", "security_auth"]

    assert [q.key for q in selector.select(missing, "dev", 2)] == [
        "type",
        "security_auth",
    ]
    assert [q.key for q in selector.select(missing, "dev", 10)] == [
        "type",
        "security_auth",
        "priority",
    ]
    assert selector.select(missing, "dev", 0) == []


def test_nothing_missing_falls_back_to_domain_slots() -> None:
    questions = QuestionSelector().select([], "video", 2)

    assert [q.key for q in questions] == ["purpose", "length"]


def test_unknown_key_gets_templated_question() -> None:
    questions = QuestionSelector().select(["budget", "type"], "dev", 2)

    assert [q.key for q in questions] == ["type", "budget"]
    assert questions[1].question == "budget에 대해 알려주세요."


def test_unknown_domain_returns_templated_questions_in_input_order() -> None:
    questions = QuestionSelector().select(["b", "a"], "music", 2)

    assert [q.key for q in questions] == ["b", "a"]
    assert QuestionSelector().select([], "music", 2) == []
