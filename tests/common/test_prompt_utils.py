import pytest

from common.prompt_utils import (
    SPACER,
    SUB_SPACER,
    Prompter,
    is_affirmative,
    yes_no_suffix,
)


@pytest.mark.parametrize("answer", ["y", "Y", "yes", "YES", "yEs", "yeS", " y ", "Yes\n"])
def test_affirmative_answers(answer):
    assert is_affirmative(answer) is True


@pytest.mark.parametrize("answer", ["n", "no", "nope", "ja", "1", "true", "yess", "y y"])
def test_other_answers_are_negative(answer):
    assert is_affirmative(answer, default=True) is False


@pytest.mark.parametrize("answer", [None, "", "   "])
def test_empty_answer_takes_default(answer):
    assert is_affirmative(answer) is False
    assert is_affirmative(answer, default=True) is True


def test_yes_no_suffix_shows_default():
    assert yes_no_suffix(True) == "<Y/n>"
    assert yes_no_suffix(False) == "<y/N>"


def test_confirm_formats_prompt(make_prompter):
    prompter = make_prompter(["yes"])
    assert prompter.confirm("Add Adminer?") is True
    assert prompter.scripted.prompts == [f"{SPACER}Add Adminer? <y/N> "]


def test_confirm_sub_prompt_uses_sub_spacer(make_prompter):
    prompter = make_prompter([""])
    assert prompter.confirm("Nested?", default=True, sub=True) is True
    assert prompter.scripted.prompts[0].startswith(SUB_SPACER)


def test_confirm_on_eof_takes_default_and_warns(make_prompter):
    prompter = make_prompter([])
    assert prompter.confirm("Start now?", default=True) is True
    assert prompter.confirm("Enable Tika?") is False
    prompter.logger.warning.assert_called()


def test_non_interactive_never_reads(app_settings):
    app_settings.non_interactive = True

    def _fail(prompt):
        raise AssertionError("stdin must not be read")

    prompter = Prompter(app_settings, input_func=_fail, secret_input_func=_fail)
    assert prompter.confirm("Anything?") is False
    assert prompter.ask("Timezone:", default="UTC") == "UTC"
    prompter.pause("Press Enter")


def test_ask_strips_and_defaults(make_prompter):
    prompter = make_prompter(["  Europe/Vienna  ", ""])
    assert prompter.ask("Timezone:", default="UTC") == "Europe/Vienna"
    assert prompter.ask("Timezone:", default="UTC") == "UTC"


def test_ask_secret_uses_secret_reader(app_settings):
    calls = []
    prompter = Prompter(
        app_settings,
        input_func=lambda prompt: calls.append(("plain", prompt)) or "visible",
        secret_input_func=lambda prompt: calls.append(("secret", prompt)) or "hidden",
    )
    assert prompter.ask("Password:", secret=True) == "hidden"
    assert calls[0][0] == "secret"
