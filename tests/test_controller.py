"""Tests for perch.controller — controller naming and action lookup."""

import pytest

from perch.controller import Controller, controller_name, find_action
from perch.errors import ConfigurationError


class FunkyController(Controller):
    def index(self):
        return None

    def New(self):  # noqa: N802
        return None

    def _helper(self):
        return None

    label = "not an action"


class LoudFunkyController(FunkyController):
    def shout(self):
        return None


class Plain:
    def show(self):
        return None


class TestControllerName:
    def test_strips_suffix(self) -> None:
        assert controller_name(FunkyController) == "Funky"

    def test_classmethod(self) -> None:
        assert FunkyController.controller_name() == "Funky"

    def test_custom_suffix(self) -> None:
        assert controller_name(FunkyController, "FunkyController") == "FunkyController"
        assert controller_name(LoudFunkyController, "FunkyController") == "Loud"

    def test_no_suffix(self) -> None:
        assert controller_name(Plain) == "Plain"

    def test_name_equal_to_suffix_kept(self) -> None:
        assert controller_name(Controller) == "Controller"

    def test_suffix_is_case_sensitive(self) -> None:
        class Mixedcontroller:
            pass

        assert controller_name(Mixedcontroller) == "Mixedcontroller"

    def test_rejects_non_class(self) -> None:
        with pytest.raises(ConfigurationError, match="controller class"):
            controller_name(FunkyController())  # type: ignore[arg-type]


class TestFindAction:
    def test_case_insensitive(self) -> None:
        assert FunkyController.find_action("INDEX") is FunkyController.index
        assert find_action(FunkyController, "new") is FunkyController.New

    def test_private_methods_are_not_actions(self) -> None:
        assert find_action(FunkyController, "_helper") is None

    def test_attributes_are_not_actions(self) -> None:
        assert find_action(FunkyController, "label") is None

    def test_base_class_methods_are_not_actions(self) -> None:
        assert find_action(FunkyController, "find_action") is None
        assert find_action(FunkyController, "controller_name") is None

    def test_inherited_actions(self) -> None:
        assert find_action(LoudFunkyController, "shout") is LoudFunkyController.shout
        assert find_action(LoudFunkyController, "index") is FunkyController.index

    def test_plain_classes_work(self) -> None:
        assert find_action(Plain, "Show") is Plain.show

    def test_missing(self) -> None:
        assert find_action(FunkyController, "missing") is None
