"""
Acceptance tests for PrintingConfig and the fluent builder.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from object_printing import (
    InvalidSelectorError,
    NumberCulture,
    ObjectPrinter,
    PrintingConfig,
    print_to_string
)

from sample_models import Household, Owner, Person, Pet


class TestExclusion:
    """Test suite for excluding fields by type and by path."""

    def test_exclude_type(self, person, settings):
        """Excluding str removes every str field, name and value."""
        result = print_to_string(person, lambda o: o.exclude_type(str), settings=settings)

        assert "name" not in result
        assert "Alex" not in result
        assert "age" in result
        assert "19" in result

    def test_exclude_field(self, person, settings):
        """Excluding one field removes only that field."""
        result = print_to_string(person, lambda o: o.exclude_field(lambda p: p.age), settings=settings)

        assert "age" not in result
        assert "19" not in result
        assert "name" in result
        assert "Alex" in result

    def test_exclude_both_types_and_fields(self, person, settings):
        """Type and path exclusions combine."""
        result = print_to_string(
            person,
            lambda o: o.exclude_field(lambda p: p.age).exclude_type(str),
            settings=settings
        )

        assert "age" not in result
        assert "19" not in result
        assert "name" not in result
        assert "Alex" not in result
        assert "height" in result
        assert "179.5" in result

    def test_exclude_type_applies_at_every_depth(self, settings):
        """A type exclusion reaches nested composites too."""
        household = Household(
            name="Home",
            first=Owner(name="Alex", pet=Pet(name="Rex", age=3)),
            second=Owner(name="Sam", pet=Pet(name="Tom", age=5))
        )

        result = ObjectPrinter.for_type(Household, settings).exclude_type(str).print_to_string(household)

        for text in ("Home", "Alex", "Sam", "Rex", "Tom", "name ="):
            assert text not in result
        assert "age = 3" in result
        assert "age = 5" in result

    def test_exclude_path_leaves_same_named_fields(self, settings):
        """Excluding first.pet.name keeps second.pet.name and every other name."""
        household = Household(
            name="Home",
            first=Owner(name="Alex", pet=Pet(name="Rex", age=3)),
            second=Owner(name="Sam", pet=Pet(name="Tom", age=5))
        )

        result = ObjectPrinter.for_type(Household, settings).exclude_field("first.pet.name").print_to_string(household)

        assert "Rex" not in result
        assert "Tom" in result
        assert "Alex" in result
        assert "Home" in result

    def test_excluded_field_leaves_no_placeholder(self, owner, settings):
        """An excluded field produces no line at all."""
        result = ObjectPrinter.for_type(Owner, settings).exclude_field("spare").print_to_string(owner)

        assert result == (
            "Owner\n"
            "\tname = Alex\n"
            "\tpet = Pet\n"
            "\t\tname = Rex\n"
            "\t\tage = 3\n"
        )

    def test_exclude_field_rejects_invalid_selector(self, settings):
        """Selector errors surface when the exclusion is configured."""
        config = ObjectPrinter.for_type(Person, settings)

        with pytest.raises(InvalidSelectorError):
            config.exclude_field(lambda p: p.nickname)


class TestSerializers:
    """Test suite for type and field serializers."""

    def test_custom_field_serializer(self, person, settings):
        """A field serializer replaces the value of that field."""
        result = print_to_string(
            person,
            lambda o: o.configure_field(lambda p: p.age).set_serializer(lambda x: f"KE{x % 10}EK"),
            settings=settings
        )

        assert "19" not in result
        assert "age = KE9EK" in result

    def test_custom_type_serializer(self, person, settings):
        """A type serializer replaces every value of that type."""
        result = print_to_string(
            person,
            lambda o: o.configure_type(str).set_serializer(lambda x: f"KE{x[:2]}EK"),
            settings=settings
        )

        assert "Alex" not in result
        assert "name = KEAlEK" in result

    def test_shrink_to_length(self, person, settings):
        """shrink_to_length cuts strings down."""
        result = print_to_string(person, lambda o: o.configure_type(str).shrink_to_length(2), settings=settings)

        assert "Alex" not in result
        assert "name = Al\n" in result

    @pytest.mark.parametrize("length", [0, 1, 3, 4, 10])
    def test_shrink_to_length_keeps_prefix(self, person, settings, length):
        """Truncated values are prefixes no longer than the requested length."""
        result = ObjectPrinter.for_type(Person, settings).configure_type(str).shrink_to_length(length).print_to_string(person)

        line = next(line for line in result.splitlines() if line.startswith("\tname = "))
        value = line[len("\tname = "):]
        assert len(value) == min(length, len("Alex"))
        assert "Alex".startswith(value)

    def test_shrink_to_negative_length_is_rejected(self, settings):
        """A negative length fails when configured."""
        with pytest.raises(ValueError):
            ObjectPrinter.for_type(Person, settings).configure_type(str).shrink_to_length(-1)

    def test_set_culture_on_float(self, person, settings):
        """set_culture formats floats with the culture's decimal separator."""
        result = ObjectPrinter.for_type(Person, settings).configure_type(float).set_culture("de-DE").print_to_string(person)

        assert "height = 179,5" in result

    def test_set_culture_on_field(self, person, settings):
        """set_culture also works on a field scope."""
        culture = NumberCulture(name="spaced", group_separator=" ", use_grouping=True)
        person.age = 1234567

        result = ObjectPrinter.for_type(Person, settings).configure_field(lambda p: p.age).set_culture(culture).print_to_string(person)

        assert "age = 1 234 567" in result

    def test_set_unknown_culture_is_rejected(self, settings):
        """Unknown culture names fail when configured."""
        with pytest.raises(KeyError):
            ObjectPrinter.for_type(Person, settings).configure_type(int).set_culture("xx-XX")

    def test_path_serializer_wins_over_type_serializer(self, person, settings):
        """Path serializer > type serializer > default formatting."""
        typed = ObjectPrinter.for_type(Person, settings).configure_type(int).set_serializer(lambda x: "TYPE")
        both = typed.configure_field("age").set_serializer(lambda x: "PATH")

        assert "age = 19" in ObjectPrinter.for_type(Person, settings).print_to_string(person)
        assert "age = TYPE" in typed.print_to_string(person)
        assert "age = PATH" in both.print_to_string(person)

    def test_path_serializer_wins_regardless_of_registration_order(self, person, settings):
        """Registering the type serializer last does not change precedence."""
        config = (ObjectPrinter.for_type(Person, settings)
                  .configure_field("age").set_serializer(lambda x: "PATH")
                  .configure_type(int).set_serializer(lambda x: "TYPE"))

        assert "age = PATH" in config.print_to_string(person)

    def test_path_serializer_stops_recursion(self, owner, settings):
        """A path serializer on a composite field renders it on one line."""
        result = ObjectPrinter.for_type(Owner, settings).configure_field("pet").set_serializer(lambda p: p.name).print_to_string(owner)

        assert "\tpet = Rex\n" in result
        assert "Pet\n" not in result
        assert "age = 3" not in result

    def test_second_serializer_replaces_first(self, person, settings, mocker):
        """Registering twice for one type keeps only the second serializer."""
        first = mocker.Mock(return_value="first")
        second = mocker.Mock(return_value="second")

        config = (ObjectPrinter.for_type(Person, settings)
                  .configure_type(str).set_serializer(first)
                  .configure_type(str).set_serializer(second))
        result = config.print_to_string(person)

        assert "name = second" in result
        assert "first" not in result
        first.assert_not_called()
        second.assert_called_once_with("Alex")
        assert len(config.type_renderers) == 1

    def test_second_field_serializer_replaces_first(self, person, settings):
        """Registering twice for one path keeps only the second serializer."""
        config = (ObjectPrinter.for_type(Person, settings)
                  .configure_field("age").set_serializer(lambda x: "first")
                  .configure_field(lambda p: p.age).set_serializer(lambda x: "second"))

        assert "age = second" in config.print_to_string(person)
        assert list(config.path_renderers) == ["age"]

    def test_same_named_fields_configured_independently(self, settings):
        """first.pet.name and second.pet.name are distinct paths."""
        household = Household(
            name="Home",
            first=Owner(name="Alex", pet=Pet(name="Rex", age=3)),
            second=Owner(name="Sam", pet=Pet(name="Tom", age=5))
        )

        result = (ObjectPrinter.for_type(Household, settings)
                  .configure_field(lambda h: h.second.pet.name).set_serializer(str.upper)
                  .print_to_string(household))

        assert "name = Rex" in result
        assert "name = TOM" in result
        assert "name = Home" in result

    def test_configure_field_rejects_invalid_selector_eagerly(self, settings):
        """configure_field fails before any serializer is set."""
        with pytest.raises(InvalidSelectorError):
            ObjectPrinter.for_type(Person, settings).configure_field(lambda p: p.name.upper())


class TestImmutability:
    """Test suite for configuration immutability."""

    def test_sibling_configurations_are_independent(self, person, settings):
        """Two configurations derived from one base never see each other."""
        printer = ObjectPrinter.for_type(Person, settings)

        kek_printer = printer.configure_type(str).set_serializer(lambda _: "KEK")
        lol_printer = printer.configure_type(str).set_serializer(lambda _: "LOL")

        kek = kek_printer.print_to_string(person)
        lol = lol_printer.print_to_string(person)
        assert "KEK" in kek and "LOL" not in kek
        assert "LOL" in lol and "KEK" not in lol
        assert "Alex" in printer.print_to_string(person)

    def test_builder_calls_return_new_configurations(self, settings):
        """Every builder call leaves the receiver untouched."""
        base = ObjectPrinter.for_type(Person, settings)

        excluded = base.exclude_type(str).exclude_field("age")

        assert excluded is not base
        assert base.excluded_types == frozenset()
        assert base.excluded_paths == frozenset()
        assert excluded.excluded_types == frozenset({str})
        assert excluded.excluded_paths == frozenset({"age"})

    def test_excluding_twice_is_a_no_op(self, settings):
        """Adding an excluded type again does not accumulate."""
        config = ObjectPrinter.for_type(Person, settings).exclude_type(str).exclude_type(str)

        assert config.excluded_types == frozenset({str})

    def test_attributes_cannot_be_assigned(self, settings):
        """Configurations reject attribute assignment."""
        config = ObjectPrinter.for_type(Person, settings)

        with pytest.raises(AttributeError):
            config._excluded_types = frozenset({str})
        with pytest.raises(AttributeError):
            config.anything = 1

    def test_renderer_tables_are_read_only(self, settings):
        """Renderer tables are read-only views."""
        config = ObjectPrinter.for_type(Person, settings).configure_type(int).set_serializer(str)

        with pytest.raises(TypeError):
            config.type_renderers[str] = str
        with pytest.raises(TypeError):
            config.path_renderers["age"] = str

    def test_shared_configuration_across_threads(self, person, settings):
        """One configuration renders identically from many threads."""
        config = ObjectPrinter.for_type(Person, settings).configure_type(str).shrink_to_length(2)
        expected = config.print_to_string(person)

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: config.print_to_string(person), range(32)))

        assert results == [expected] * 32

    def test_with_operations(self, settings):
        """The low-level with_* operations each return a new state."""
        base = PrintingConfig(Person, settings)

        config = (base
                  .with_excluded_type(bool)
                  .with_excluded_path("height")
                  .with_type_renderer(int, str)
                  .with_path_renderer("name", str))

        assert config.excluded_types == frozenset({bool})
        assert config.excluded_paths == frozenset({"height"})
        assert dict(config.type_renderers) == {int: str}
        assert dict(config.path_renderers) == {"name": str}
        assert config.root_type is Person
        assert config.settings is settings

    def test_non_callable_renderer_is_rejected(self, settings):
        """Renderers must be callable."""
        with pytest.raises(TypeError):
            PrintingConfig(Person, settings).with_type_renderer(int, "not callable")


class TestEntryPoints:
    """Test suite for the top-level entry points."""

    def test_print_to_string_default(self, person, settings):
        """The default configuration prints every field."""
        result = print_to_string(person, settings=settings)

        assert result == (
            "Person\n"
            "\tid = ffffffff-ffff-ffff-ffff-ffffffffffff\n"
            "\tname = Alex\n"
            "\tage = 19\n"
            "\theight = 179.5\n"
        )

    def test_print_to_string_matches_for_type(self, person, settings):
        """print_to_string with a configurer equals building the chain by hand."""
        by_hand = ObjectPrinter.for_type(Person, settings).configure_type(int).set_culture("en-US").print_to_string(person)

        via_entry = print_to_string(person, lambda o: o.configure_type(int).set_culture("en-US"), settings=settings)

        assert by_hand == via_entry

    def test_print_none(self, settings):
        """Printing None is not an error."""
        assert print_to_string(None, settings=settings) == "null\n"

    def test_default_configuration_is_empty(self, settings):
        """for_type returns a configuration with no overrides."""
        config = ObjectPrinter.for_type(Person, settings)

        assert config.root_type is Person
        assert not config.excluded_types
        assert not config.excluded_paths
        assert not config.type_renderers
        assert not config.path_renderers

    def test_demo_chain(self, person, settings):
        """A long chain of every builder operation renders the expected text."""
        printer = (ObjectPrinter.for_type(Person, settings)
                   .exclude_type(bool)
                   .configure_type(int).set_serializer(lambda i: "")
                   .configure_type(int).set_culture("invariant")
                   .configure_field(lambda p: p.name).set_serializer(str)
                   .configure_type(str).shrink_to_length(10)
                   .exclude_field(lambda p: p.name))

        assert printer.print_to_string(person) == (
            "Person\n"
            "\tid = ffffffff-ffff-ffff-ffff-ffffffffffff\n"
            "\tage = 19\n"
            "\theight = 179.5\n"
        )
