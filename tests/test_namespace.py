"""Tests for Namespace — declaration, typed accessors and failure policies end to end."""

import pytest

from service_variables import (
    DEFAULT_STORAGE_KEY,
    CorruptValueError,
    FailurePolicy,
    InvalidDefinitionError,
    InvalidValueError,
    Namespace,
    NotConfiguredError,
    StoreConnectionError,
)

# ── unconfigured use ─────────────────────────────────────────


def test_unconfigured_namespace_raises():
    ns = Namespace()
    bar = ns.boolean_option("bar")
    with pytest.raises(NotConfiguredError, match="Store client not given."):
        bar.get()
    with pytest.raises(NotConfiguredError):
        bar.set(True)
    with pytest.raises(NotConfiguredError):
        ns.set("bar", "not a boolean")
    with pytest.raises(NotConfiguredError):
        ns.clear("bar")


def test_declare_does_not_touch_store(store):
    store.reads_down = True
    store.writes_down = True
    ns = Namespace(store)
    ns.integer_option("int", default=1)
    assert ns.options() == ["int"]


# ── defaults and round trips ─────────────────────────────────


def test_defaults(ns):
    assert ns.get("bool") is True
    assert ns.get("int") == 5
    assert ns.get("float") == 3.9
    assert ns.get("string") == "string 0"


def test_default_none_when_not_declared():
    from service_variables.stores import InMemoryHashStore

    ns = Namespace(InMemoryHashStore())
    opt = ns.string_option("s")
    assert opt.get() is None


def test_updates_within_bounds(ns):
    ns.set("bool", False)
    assert ns.get("bool") is False
    ns.set("int", 2)
    assert ns.get("int") == 2
    ns.set("float", 2.1)
    assert ns.get("float") == 2.1
    ns.set("string", "string 1")
    assert ns.get("string") == "string 1"
    ns.set("string2", "any")
    assert ns.get("string2") == "any"


def test_string_forms_are_coerced(ns):
    ns.set("bool", "false")
    assert ns.get("bool") is False
    ns.set("int", "7")
    assert ns.get("int") == 7
    ns.set("float", "4")
    assert ns.get("float") == 4.0


def test_stored_representation(ns, store):
    ns.set("bool", True)
    ns.set("int", 8)
    ns.set("float", 2.5)
    ns.set("string2", "verbatim text")
    assert store.snapshot(DEFAULT_STORAGE_KEY) == {
        "bool": "true",
        "int": "8",
        "float": "2.5",
        "string2": "verbatim text",
    }


def test_option_accessor_pair(ns):
    opt = ns.option("int")
    opt.set(9)
    assert opt.get() == 9
    assert ns.get("int") == 9


def test_clear_reverts_to_default(ns, store):
    ns.set("int", 9)
    ns.set("int", None)
    assert ns.get("int") == 5
    assert "int" not in store.snapshot(DEFAULT_STORAGE_KEY)

    ns.set("string", "string 1")
    ns.clear("string")
    assert ns.get("string") == "string 0"


# ── invalid writes ───────────────────────────────────────────


@pytest.mark.parametrize(
    ("name", "value", "message"),
    [
        ("int", 0, "Value too small. min = 1"),
        ("int", 11, "Value too large. max = 10"),
        ("float", 1.1, "Value too small. min = 1.2"),
        ("float", 9.4, "Value too large. max = 9.3"),
        ("string", "string 2", "Only ['string 0', 'string 1'] values are allowed."),
        ("bool", "yes", "Value isn't `true` or `false`"),
        ("int", "abc", "not a number"),
    ],
)
def test_invalid_write_raises_and_keeps_previous(ns, store, name, value, message):
    before = store.snapshot(DEFAULT_STORAGE_KEY)
    with pytest.raises(InvalidValueError) as exc_info:
        ns.set(name, value)
    assert str(exc_info.value) == message
    assert store.snapshot(DEFAULT_STORAGE_KEY) == before


def test_invalid_write_keeps_written_value(ns):
    ns.set("int", 7)
    with pytest.raises(InvalidValueError):
        ns.set("int", 42)
    assert ns.get("int") == 7


# ── declaration errors ───────────────────────────────────────


def test_duplicate_declaration(ns):
    with pytest.raises(InvalidDefinitionError, match="already declared"):
        ns.integer_option("int")


def test_unknown_option_name(ns):
    with pytest.raises(KeyError):
        ns.get("missing")


# ── corrupt data ─────────────────────────────────────────────


def test_corrupt_stored_integer(ns, store):
    store.hash_set(DEFAULT_STORAGE_KEY, "int", "not-a-number")
    with pytest.raises(CorruptValueError):
        ns.get("int")


def test_boolean_reads_any_other_string_as_false(ns, store):
    store.hash_set(DEFAULT_STORAGE_KEY, "bool", "yes")
    assert ns.get("bool") is False


# ── separation by key suffix ─────────────────────────────────


def test_separation_by_key_suffix(ns, store):
    custom = Namespace(store, key_suffix="custom")
    custom.integer_option("int", default=1, min=1, max=10)

    ns.set("int", 8)
    custom.set("int", 9)
    assert ns.get("int") == 8
    assert custom.get("int") == 9
    assert custom.storage_key == "service_variables_redis_key:custom"


# ── failure policies ─────────────────────────────────────────


def _int_namespace(store, **kwargs):
    ns = Namespace(store, **kwargs)
    ns.integer_option("int", default=1, min=1, max=10)
    return ns


def test_raise_policy_is_default(store):
    ns = _int_namespace(store)
    assert ns.get("int") == 1
    ns.set("int", 5)
    assert ns.get("int") == 5
    store.reads_down = True
    with pytest.raises(StoreConnectionError):
        ns.get("int")


def test_use_default_policy(store):
    ns = _int_namespace(store, failure_policy="use_default")
    ns.set("int", 5)
    assert ns.get("int") == 5
    store.reads_down = True
    assert ns.get("int") == 1


def test_use_last_value_policy(store):
    ns = _int_namespace(store, failure_policy="use_last_value")
    assert ns.get("int") == 1
    ns.set("int", 5)
    assert ns.get("int") == 5
    store.reads_down = True
    assert ns.get("int") == 5


def test_use_last_value_tracks_external_writes(store):
    ns = _int_namespace(store, failure_policy="use_last_value")
    ns.set("int", 5)
    store.hash_set(ns.storage_key, "int", "7")
    assert ns.get("int") == 7
    store.reads_down = True
    assert ns.get("int") == 7


def test_use_last_value_without_history_returns_default(store):
    ns = _int_namespace(store, failure_policy="use_last_value")
    store.reads_down = True
    assert ns.get("int") == 1


def test_mixed_failure_policies(store):
    ns = Namespace(store, failure_policy="use_default")
    ns.integer_option("int", default=1, min=1, max=10, failure_policy="use_last_value")
    ns.string_option(
        "string",
        default="string 0",
        enum=["string 0", "string 1"],
        failure_policy="raise_exception",
    )
    ns.boolean_option("bool", default=True)

    ns.set("int", 5)
    assert ns.get("int") == 5
    ns.set("string", "string 1")
    assert ns.get("string") == "string 1"
    ns.set("bool", False)
    assert ns.get("bool") is False

    store.reads_down = True

    assert ns.get("int") == 5
    with pytest.raises(StoreConnectionError):
        ns.get("string")
    assert ns.get("bool") is True


def test_option_without_override_follows_namespace_policy(store):
    ns = _int_namespace(store)
    assert ns.option("int").failure_policy is FailurePolicy.RAISE
    ns.configure(store, failure_policy="use_default")
    assert ns.option("int").failure_policy is FailurePolicy.USE_DEFAULT


def test_invalid_failure_policy_configuration(store):
    ns = Namespace()
    with pytest.raises(InvalidValueError):
        ns.configure(store, failure_policy="bad_mode")
    assert not ns.configured


def test_invalid_failure_policy_in_constructor(store):
    with pytest.raises(InvalidValueError):
        Namespace(store, failure_policy="bad_mode")


def test_reconfigure_resets_last_known_values(store):
    ns = _int_namespace(store, failure_policy="use_last_value")
    ns.set("int", 5)
    ns.configure(store, failure_policy="use_last_value")
    store.reads_down = True
    assert ns.get("int") == 1


def test_writes_fail_during_outage_regardless_of_policy(store):
    ns = _int_namespace(store, failure_policy="use_last_value")
    ns.set("int", 5)
    store.writes_down = True
    with pytest.raises(StoreConnectionError):
        ns.set("int", 6)
    assert ns.get("int") == 5


# ── introspection ────────────────────────────────────────────


def test_export(store):
    ns = Namespace(store, key_suffix="custom", failure_policy="use_default")
    ns.integer_option("int", default=1, min=1, max=10)
    ns.boolean_option("flag", failure_policy="raise")

    data = ns.export()
    assert data["storage_key"] == "service_variables_redis_key:custom"
    assert data["key_suffix"] == "custom"
    assert data["failure_policy"] == "use_default"
    assert data["configured"] is True
    assert data["option_count"] == 2
    assert [o["name"] for o in data["options"]] == ["int", "flag"]
    assert data["options"][1]["failure_policy"] == "raise"


def test_contains_and_spec(ns):
    assert "int" in ns
    assert "nope" not in ns
    assert ns.spec("int").max == 10


# ── oversized numbers ────────────────────────────────────────


@pytest.mark.parametrize(
    ("name", "value"),
    [("float", 10**400), ("int", "9" * 5000), ("int", 10**5000)],
    ids=["float-overflow", "int-long-numeral", "int-too-many-digits"],
)
def test_oversized_numbers_rejected(ns, store, name, value):
    with pytest.raises(InvalidValueError, match="not a number"):
        ns.set(name, value)
    assert store.snapshot(DEFAULT_STORAGE_KEY) == {}


def test_float_default_reads_as_float(store):
    ns = Namespace(store)
    ratio = ns.float_option("ratio", default=2)
    assert ratio.get() == 2.0
    assert isinstance(ratio.get(), float)
