import pytest

from booleanize_al.declaration import (
    BareName,
    BoolAttrSpec,
    PairMap,
    Triple,
    classify,
    expand,
    is_identifier,
    parse,
)
from booleanize_al.errors import (
    BooleanizeError,
    InvalidArrayShape,
    InvalidDeclarationKind,
    InvalidPairShape,
)


class TestIsIdentifier:
    @pytest.mark.parametrize("value", ["active", "_hidden", "is_ok2"])
    def test_valid(self, value):
        assert is_identifier(value) is True

    @pytest.mark.parametrize(
        "value", ["", "not a valid entry", "2nd", "class", b"active", None, 1]
    )
    def test_invalid(self, value):
        assert is_identifier(value) is False


class TestClassify:
    def test_bare_name(self):
        assert classify("active") == BareName(name="active")

    def test_triple_from_list(self):
        assert classify(["smart", "Yes!", "No"]) == Triple(
            name="smart", true_text="Yes!", false_text="No"
        )

    def test_triple_from_tuple(self):
        assert classify(("smart", "Yes!", "No")) == Triple(
            name="smart", true_text="Yes!", false_text="No"
        )

    def test_mapping_keeps_order(self):
        result = classify({"b": ("1", "0"), "a": ("y", "n")})
        assert isinstance(result, PairMap)
        assert [k for k, _ in result.pairs] == ["b", "a"]

    def test_variants_pass_through(self):
        decl = Triple(name="x", true_text="a", false_text="b")
        assert classify(decl) is decl

    @pytest.mark.parametrize(
        "entry",
        [
            ("bla",),
            ("bla", "Yes!"),
            ("bla", "Yes!", None),
            ("bla", "Yes!", 3),
            ("bla", "Yes!", "No", "Maybe"),
            ("not valid", "Yes!", "No"),
            (1, "Yes!", "No"),
            [],
        ],
    )
    def test_bad_array(self, entry):
        with pytest.raises(InvalidArrayShape) as exc_info:
            classify(entry)
        assert exc_info.value.value == entry
        assert repr(entry) in str(exc_info.value)

    @pytest.mark.parametrize(
        "entry", ["not a valid entry", "", 42, None, 1.5, b"bytes", {"x"}]
    )
    def test_bad_kind(self, entry):
        with pytest.raises(InvalidDeclarationKind) as exc_info:
            classify(entry)
        assert repr(entry) in str(exc_info.value)


class TestExpand:
    def test_bare_name(self):
        assert list(expand(BareName(name="active"))) == [
            BoolAttrSpec(name="active")
        ]

    def test_pair_map(self):
        decl = PairMap.from_mapping(
            {"deleted": ["Gone", "Here"], "rated": ("Rated", "Unrated")}
        )
        assert list(expand(decl)) == [
            BoolAttrSpec(name="deleted", true_text="Gone", false_text="Here"),
            BoolAttrSpec(
                name="rated", true_text="Rated", false_text="Unrated"
            ),
        ]

    def test_pair_map_stops_at_first_error(self):
        decl = PairMap.from_mapping(
            {"a": ("1", "0"), "b": ("only_one",), "c": ("1", "0")}
        )
        produced = []
        with pytest.raises(InvalidPairShape) as exc_info:
            for spec in expand(decl):
                produced.append(spec.name)
        assert produced == ["a"]
        assert exc_info.value.key == "b"
        assert exc_info.value.value == ("only_one",)

    def test_unknown_variant(self):
        with pytest.raises(InvalidDeclarationKind):
            list(expand("active"))  # type: ignore


class TestParse:
    def test_mixed_entries(self):
        result = parse(
            [
                ("dumb", "Dumb as hell!", "No, this is a smart one!"),
                "active",
                {"deleted": ("Yes, I'm gone", "No, I'm still here!")},
            ]
        )
        assert result == [
            BoolAttrSpec(
                name="dumb",
                true_text="Dumb as hell!",
                false_text="No, this is a smart one!",
            ),
            BoolAttrSpec(name="active"),
            BoolAttrSpec(
                name="deleted",
                true_text="Yes, I'm gone",
                false_text="No, I'm still here!",
            ),
        ]

    def test_empty(self):
        assert parse([]) == []

    def test_empty_mapping(self):
        assert parse([{}]) == []

    @pytest.mark.parametrize(
        "value", [[], ["only_one"], ["a", "b", "c"], "ab", ("a", 1), None]
    )
    def test_bad_pair(self, value):
        with pytest.raises(InvalidPairShape) as exc_info:
            parse([{"f": value}])
        assert repr(value) in str(exc_info.value)

    def test_bad_mapping_key(self):
        with pytest.raises(InvalidPairShape):
            parse([{"not valid": ("a", "b")}])

    def test_error_aborts_whole_call(self):
        with pytest.raises(BooleanizeError):
            parse(["active", ("smart", "Yes!"), "dumb"])

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            parse([42])
