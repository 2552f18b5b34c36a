import pytest
from pydantic import ValidationError

from db_connection_model import (
    ConfigErrorKind,
    ModelConfig,
    ModelConfigError,
    PoolConfig,
    RetryConfig,
    SyncConfig,
    TransactionConfig,
)

GROUPS = [SyncConfig, PoolConfig, TransactionConfig, RetryConfig]


class TestDefaults:

    def test_model_default_values(self):
        cfg = ModelConfig.default()
        assert cfg.host == "localhost"
        assert cfg.port == 3306
        assert cfg.username is None
        assert cfg.password is None
        assert cfg.database is None
        assert cfg.dialect == "mysql"
        assert cfg.protocol == "tcp"
        assert cfg.logging is False
        assert cfg.omit_null is False
        assert cfg.operators_aliases is None
        assert cfg.sync == SyncConfig(force=False, alter=False)
        assert cfg.pool == PoolConfig(max=5, min=0, idle=10000, acquire=60000, evict=1000)
        assert cfg.transaction == TransactionConfig(type="DEFERRED", isolation_level="REPEATABLE_READ")
        assert cfg.retry == RetryConfig(max=5)

    @pytest.mark.parametrize("builder", GROUPS + [ModelConfig])
    def test_default_twice_equal_not_identical(self, builder):
        first = builder.default()
        second = builder.default()
        assert first == second
        assert first is not second

    @pytest.mark.parametrize("builder", GROUPS + [ModelConfig])
    def test_from_empty_equals_default(self, builder):
        assert builder.from_raw({}) == builder.default()


class TestNestedFromRaw:

    def test_pool_partial(self):
        pool = PoolConfig.from_raw({"max": 20, "acquire": 500})
        assert pool == PoolConfig(max=20, min=0, idle=10000, acquire=500, evict=1000)

    def test_sync_overrides(self):
        assert SyncConfig.from_raw({"force": True}) == SyncConfig(force=True, alter=False)

    def test_transaction_uses_document_keys(self):
        tx = TransactionConfig.from_raw({"type": "IMMEDIATE", "isolation-level": "SERIALIZABLE"})
        assert tx.type == "IMMEDIATE"
        assert tx.isolation_level == "SERIALIZABLE"

    def test_unknown_keys_ignored(self):
        assert RetryConfig.from_raw({"max": 2, "backoff": 100}) == RetryConfig(max=2)

    def test_wrong_type_names_field(self):
        with pytest.raises(ModelConfigError) as exc:
            PoolConfig.from_raw({"max": "5"})
        err = exc.value
        assert err.kind is ConfigErrorKind.USER_CONFIG_INVALID
        assert err.component == "pool"
        assert err.recoverable
        assert err.origin.kind is ConfigErrorKind.TYPE_MISMATCH
        assert err.origin.field == "max"
        assert err.origin.expected == "integer"
        assert err.origin.actual == "string"
        assert err.__cause__ is err.cause

    def test_no_string_coercion(self):
        with pytest.raises(ModelConfigError) as exc:
            SyncConfig.from_raw({"alter": "true"})
        assert exc.value.origin.field == "alter"

    def test_null_member_rejected(self):
        with pytest.raises(ModelConfigError) as exc:
            RetryConfig.from_raw({"max": None})
        assert exc.value.origin.kind is ConfigErrorKind.MISSING_FIELD

    def test_raw_must_be_mapping(self):
        with pytest.raises(ModelConfigError) as exc:
            PoolConfig.from_raw(None)
        assert exc.value.kind is ConfigErrorKind.USER_CONFIG_INVALID
        assert exc.value.origin.actual == "null"

    def test_permissive_values(self):
        # Neither min <= max nor the enumerations are enforced.
        assert PoolConfig.from_raw({"min": 10, "max": 1}).min == 10
        assert TransactionConfig.from_raw({"type": "WHATEVER"}).type == "WHATEVER"


class TestModelFromRaw:

    def test_round_trip(self):
        raw = {
            "host": "127.0.0.1",
            "port": 5432,
            "username": "app",
            "password": "secret",
            "database": "main",
            "dialect": "postgres",
            "protocol": "tcp",
            "logging": True,
            "omit-null": True,
            "operators-aliases": {"$eq": "eq"},
            "sync": {"alter": True},
            "pool": {"max": 5},
            "transaction": {"isolation-level": "READ_COMMITTED"},
            "retry": {"max": 0},
        }
        cfg = ModelConfig.from_raw(raw)
        assert cfg.host == "127.0.0.1"
        assert cfg.port == 5432
        assert cfg.username == "app"
        assert cfg.password == "secret"
        assert cfg.database == "main"
        assert cfg.dialect == "postgres"
        assert cfg.logging is True
        assert cfg.omit_null is True
        assert cfg.operators_aliases == {"$eq": "eq"}
        assert cfg.sync == SyncConfig(force=False, alter=True)
        assert cfg.pool.max == 5
        assert cfg.pool.min == 0
        assert cfg.pool.idle == 10000
        assert cfg.transaction == TransactionConfig(type="DEFERRED", isolation_level="READ_COMMITTED")
        assert cfg.retry.max == 0

    def test_nullable_fields(self):
        cfg = ModelConfig.from_raw({"username": None, "operators-aliases": None})
        assert cfg.username is None
        assert cfg.operators_aliases is None

    def test_host_not_nullable(self):
        with pytest.raises(ModelConfigError) as exc:
            ModelConfig.from_raw({"host": None})
        err = exc.value
        assert err.kind is ConfigErrorKind.USER_CONFIG_INVALID
        assert err.component == "model"
        assert err.origin.kind is ConfigErrorKind.MISSING_FIELD
        assert err.origin.field == "host"

    def test_nullable_still_type_checked(self):
        with pytest.raises(ModelConfigError) as exc:
            ModelConfig.from_raw({"password": 1234})
        assert exc.value.origin.field == "password"

    def test_nested_error_propagates_unchanged(self):
        with pytest.raises(ModelConfigError) as exc:
            ModelConfig.from_raw({"pool": {"max": "5"}})
        err = exc.value
        assert err.kind is ConfigErrorKind.USER_CONFIG_INVALID
        assert err.component == "pool"
        assert err.origin.field == "max"

    def test_group_must_be_mapping(self):
        with pytest.raises(ModelConfigError) as exc:
            ModelConfig.from_raw({"sync": True})
        err = exc.value
        assert err.component == "model"
        assert err.origin.kind is ConfigErrorKind.TYPE_MISMATCH
        assert err.origin.field == "sync"

    def test_raw_must_be_mapping(self):
        with pytest.raises(ModelConfigError) as exc:
            ModelConfig.from_raw(["host"])
        assert exc.value.origin.actual == "array"

    def test_operators_aliases_copied(self):
        aliases = {"$gt": "gt"}
        cfg = ModelConfig.from_raw({"operators-aliases": aliases})
        aliases["$lt"] = "lt"
        assert cfg.operators_aliases == {"$gt": "gt"}

    def test_immutable(self):
        cfg = ModelConfig.default()
        with pytest.raises(ValidationError):
            cfg.host = "elsewhere"
        with pytest.raises(ValidationError):
            cfg.pool.max = 100


class TestToDict:

    def test_flat_shape(self):
        data = ModelConfig.from_raw({"pool": {"max": 7}, "omit-null": True}).to_dict()
        assert list(data) == [
            "host", "port", "username", "password", "database", "dialect",
            "protocol", "sync", "logging", "omitNull", "pool",
            "transactionType", "isolationLevel", "retry", "operatorsAliases",
        ]
        assert data["sync"] == {"force": False, "alter": False}
        assert data["pool"] == {"max": 7, "min": 0, "idle": 10000, "acquire": 60000, "evict": 1000}
        assert data["transactionType"] == "DEFERRED"
        assert data["isolationLevel"] == "REPEATABLE_READ"
        assert data["retry"] == {"max": 5}
        assert data["omitNull"] is True

    def test_group_dicts(self):
        assert TransactionConfig.default().to_dict() == {
            "transactionType": "DEFERRED",
            "isolationLevel": "REPEATABLE_READ",
        }


class TestBrokenDefaults:

    def test_nested_default_invalid(self, override_defaults):
        override_defaults(lambda doc: doc["pool"].update(max="five"))
        with pytest.raises(ModelConfigError) as exc:
            PoolConfig.default()
        err = exc.value
        assert err.kind is ConfigErrorKind.DEFAULT_CONFIG_INVALID
        assert err.component == "pool"
        assert not err.recoverable
        assert err.origin.field == "max"

    def test_from_raw_surfaces_default_error(self, override_defaults):
        override_defaults(lambda doc: doc["pool"].update(max="five"))
        with pytest.raises(ModelConfigError) as exc:
            PoolConfig.from_raw({"max": 5})
        assert exc.value.kind is ConfigErrorKind.DEFAULT_CONFIG_INVALID

    def test_model_from_raw_surfaces_nested_default_error(self, override_defaults):
        override_defaults(lambda doc: doc["retry"].pop("max"))
        with pytest.raises(ModelConfigError) as exc:
            ModelConfig.from_raw({})
        err = exc.value
        assert err.kind is ConfigErrorKind.DEFAULT_CONFIG_INVALID
        assert err.component == "retry"
        assert err.origin.kind is ConfigErrorKind.MISSING_FIELD

    def test_top_level_default_invalid(self, override_defaults):
        override_defaults(lambda doc: doc.update(host=None))
        with pytest.raises(ModelConfigError) as exc:
            ModelConfig.default()
        assert exc.value.kind is ConfigErrorKind.DEFAULT_CONFIG_INVALID
        assert exc.value.component == "model"

    def test_missing_group_in_document(self, override_defaults):
        override_defaults(lambda doc: doc.pop("sync"))
        with pytest.raises(ModelConfigError) as exc:
            SyncConfig.default()
        assert exc.value.origin.field == "sync"

    def test_unreadable_document(self, override_defaults, tmp_path):
        path = override_defaults()
        path.unlink()
        with pytest.raises(ModelConfigError) as exc:
            ModelConfig.default()
        err = exc.value
        assert err.kind is ConfigErrorKind.DEFAULT_CONFIG_INVALID
        assert err.origin.kind is ConfigErrorKind.IO


class TestOperatorsAliases:

    def test_read_only(self):
        cfg = ModelConfig.from_raw({"operators-aliases": {"$in": ["in", "within"], "$gt": {"op": "gt"}}})
        with pytest.raises(TypeError):
            cfg.operators_aliases["$lt"] = "lt"
        with pytest.raises(TypeError):
            cfg.operators_aliases["$gt"]["op"] = "lt"
        assert cfg.operators_aliases["$in"] == ("in", "within")

    def test_to_dict_returns_plain_copy(self):
        cfg = ModelConfig.from_raw({"operators-aliases": {"$in": ["in"], "$gt": {"op": "gt"}}})
        data = cfg.to_dict()["operatorsAliases"]
        assert data == {"$in": ["in"], "$gt": {"op": "gt"}}
        data["$gt"]["op"] = "lt"
        assert cfg.operators_aliases["$gt"]["op"] == "gt"

    def test_equality_by_value(self):
        raw = {"operators-aliases": {"$eq": "eq"}}
        assert ModelConfig.from_raw(raw) == ModelConfig.from_raw(raw)
