"""Component resolution: naming helpers and strategy precedence."""

from __future__ import annotations

import hashlib

import pytest

from xtags.errors import UnresolvedAliasError, UnresolvedComponentError
from xtags.finders import StaticTypeFinder, StaticViewFinder
from xtags.resolver import (
    AnonymousPath,
    ComponentRegistry,
    ComponentResolver,
    RawView,
    TypedComponent,
    ViewComponent,
    camel,
    format_class_name,
    guess_view_name,
    studly,
)


def _resolver(types=None, views=(), **registry) -> ComponentResolver:
    return ComponentResolver(
        ComponentRegistry(**registry), StaticTypeFinder(types or {}), StaticViewFinder(views)
    )


def _md5(value: str) -> str:
    return hashlib.md5(value.encode()).hexdigest()


class TestNaming:
    @pytest.mark.parametrize(
        "value,expected",
        [("alert", "Alert"), ("text-input", "TextInput"), ("snake_case", "SnakeCase"), ("", "")],
    )
    def test_studly(self, value, expected):
        assert studly(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [("alert-type", "alertType"), ("alertType", "alertType"), ("a_b-c", "aBC")],
    )
    def test_camel(self, value, expected):
        assert camel(value) == expected

    def test_format_class_name(self):
        assert format_class_name("forms.text-input") == "Forms\\TextInput"

    def test_guess_view_name(self):
        assert guess_view_name("card") == "components.card"
        assert guess_view_name("card", "ui") == "ui.card"
        assert guess_view_name("pkg::card", "components") == "pkg::components.card"

    def test_prefix_hash(self):
        assert AnonymousPath("/views/ui").prefix_hash == _md5("/views/ui")
        assert AnonymousPath("/views/ui", "ui").prefix_hash == _md5("ui")


class TestAlias:
    def test_alias_to_type(self):
        r = _resolver({"App\\Alert": ("type", "message")}, aliases={"alert": "App\\Alert"})
        assert r.resolve("alert") == TypedComponent("App\\Alert")

    def test_alias_to_view(self):
        r = _resolver(views={"partials.alert"}, aliases={"alert": "partials.alert"})
        assert r.resolve("alert") == ViewComponent("partials.alert")

    def test_alias_beats_convention(self):
        r = _resolver(
            {"App\\Special\\Alert": (), "App\\View\\Components\\Alert": ()},
            aliases={"alert": "App\\Special\\Alert"},
        )
        assert r.resolve("alert") == TypedComponent("App\\Special\\Alert")

    def test_broken_alias_does_not_fall_through(self):
        r = _resolver(
            {"App\\View\\Components\\Alert": ()},
            views={"components.alert"},
            aliases={"alert": "Missing\\Alert"},
        )
        with pytest.raises(UnresolvedAliasError) as exc_info:
            r.resolve("alert")
        err = exc_info.value
        assert err.alias == "Missing\\Alert"
        assert err.component == "alert"
        assert "Missing\\Alert" in err.message
        assert "[alert]" in err.message


class TestTypes:
    def test_namespace_lookup(self):
        r = _resolver(
            {"Nightshade\\View\\Components\\Calendar": ()},
            namespaces={"nightshade": "Nightshade\\View\\Components"},
        )
        assert r.resolve("nightshade::calendar") == TypedComponent(
            "Nightshade\\View\\Components\\Calendar"
        )

    def test_namespace_lookup_dotted(self):
        r = _resolver(
            {"Pkg\\Forms\\TextInput": ()},
            namespaces={"pkg": "Pkg\\"},
        )
        assert r.resolve("pkg::forms.text-input") == TypedComponent("Pkg\\Forms\\TextInput")

    def test_unregistered_namespace_skipped(self):
        r = _resolver({"Other\\Calendar": ()})
        with pytest.raises(UnresolvedComponentError):
            r.resolve("other::calendar")

    def test_convention(self):
        r = _resolver({"App\\View\\Components\\Forms\\TextInput": ()})
        assert r.resolve("forms.text-input") == TypedComponent(
            "App\\View\\Components\\Forms\\TextInput"
        )

    def test_custom_app_namespace(self):
        r = _resolver({"Acme\\View\\Components\\Alert": ()}, app_namespace="Acme")
        assert r.resolve("alert") == TypedComponent("Acme\\View\\Components\\Alert")

    def test_type_beats_anonymous_view(self):
        r = _resolver({"App\\View\\Components\\Card": ()}, views={"components.card"})
        assert r.resolve("card") == TypedComponent("App\\View\\Components\\Card")


class TestAnonymousPaths:
    def test_unprefixed_path(self):
        path = AnonymousPath("/views/ui")
        r = _resolver(views={f"{path.prefix_hash}::button"}, anonymous_paths=(path,))
        assert r.resolve("button") == ViewComponent(f"{path.prefix_hash}::button")

    def test_index_view(self):
        path = AnonymousPath("/views/ui")
        r = _resolver(views={f"{path.prefix_hash}::button.index"}, anonymous_paths=(path,))
        assert r.resolve("button") == ViewComponent(f"{path.prefix_hash}::button.index")

    def test_prefixed_path(self):
        path = AnonymousPath("/views/ui", "ui")
        r = _resolver(views={f"{path.prefix_hash}::button"}, anonymous_paths=(path,))
        assert r.resolve("ui::button") == ViewComponent(f"{path.prefix_hash}::button")

    def test_other_prefix_skipped(self):
        path = AnonymousPath("/views/ui", "ui")
        r = _resolver(views={f"{path.prefix_hash}::button"}, anonymous_paths=(path,))
        with pytest.raises(UnresolvedComponentError):
            r.resolve("other::button")

    def test_registration_order(self):
        first = AnonymousPath("/a")
        second = AnonymousPath("/b")
        r = _resolver(
            views={f"{first.prefix_hash}::card", f"{second.prefix_hash}::card"},
            anonymous_paths=(first, second),
        )
        assert r.resolve("card") == ViewComponent(f"{first.prefix_hash}::card")

    def test_path_beats_namespace(self):
        path = AnonymousPath("/views/ui")
        r = _resolver(
            views={f"{path.prefix_hash}::card", "components.card"},
            anonymous_paths=(path,),
        )
        assert r.resolve("card") == ViewComponent(f"{path.prefix_hash}::card")


class TestAnonymousNamespaces:
    def test_default_components_directory(self):
        r = _resolver(views={"components.card"})
        assert r.resolve("card") == ViewComponent("components.card")

    def test_default_index(self):
        r = _resolver(views={"components.card.index"})
        assert r.resolve("card") == ViewComponent("components.card.index")

    def test_view_before_index(self):
        r = _resolver(views={"components.card", "components.card.index"})
        assert r.resolve("card") == ViewComponent("components.card")

    def test_hinted_default(self):
        r = _resolver(views={"pkg::components.card"})
        assert r.resolve("pkg::card") == ViewComponent("pkg::components.card")

    def test_registered_namespace(self):
        r = _resolver(
            views={"flux.components.button"},
            anonymous_namespaces={"flux": "flux.components"},
        )
        assert r.resolve("flux::button") == ViewComponent("flux.components.button")

    def test_registered_namespace_before_default(self):
        r = _resolver(
            views={"flux.button", "flux::components.button"},
            anonymous_namespaces={"flux": "flux"},
        )
        assert r.resolve("flux::button") == ViewComponent("flux.button")

    def test_non_matching_namespace_ignored(self):
        r = _resolver(views={"flux.button"}, anonymous_namespaces={"flux": "flux"})
        with pytest.raises(UnresolvedComponentError):
            r.resolve("button")


class TestFallback:
    def test_mail_raw_view(self):
        assert _resolver().resolve("mail::message") == RawView("mail::message")

    def test_mail_anonymous_view_wins(self):
        r = _resolver(views={"mail::components.message"})
        assert r.resolve("mail::message") == ViewComponent("mail::components.message")

    def test_unresolved(self):
        with pytest.raises(UnresolvedComponentError) as exc_info:
            _resolver().resolve("missing")
        assert exc_info.value.component == "missing"
        assert "[missing]" in str(exc_info.value)
