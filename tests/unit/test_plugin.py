"""End-to-end tests of the last-modified-fields plugin on the reference host."""

from datetime import datetime, timedelta

import pytest

from shadowstamp import Schema, ShadowFieldSettings, ShadowStampError, ErrorCode, last_modified_fields, model
from shadowstamp.augment.plugin import ShadowFieldAugmentor
from shadowstamp.constants import SerializationView

SUFFIX = "_lastModified"
SYSTEM_KEYS = ["_id", "__t", "__v"]


class TestCreatingKeys:
    """Shadow paths derived when the plugin is applied."""

    def test_no_shadow_key_on_system_keys(self, Car):
        for key in SYSTEM_KEYS:
            assert key + SUFFIX not in Car.schema.paths

    def test_no_shadow_key_on_omitted_field(self, Car):
        assert "vin" + SUFFIX not in Car.schema.paths

    def test_shadow_key_for_every_other_user_path(self, Car):
        for name in Car.schema.paths:
            if name in SYSTEM_KEYS or name == "vin" or SUFFIX in name:
                continue
            assert name + SUFFIX in Car.schema.paths

    def test_shadow_keys_are_tagged_timestamps(self, Car):
        path = Car.schema.paths["make" + SUFFIX]
        assert path.is_shadow is True
        assert path.base_path == "make"

    def test_default_suffix(self):
        schema = Schema({"make": str}).plugin(last_modified_fields)
        assert "make_lastModifiedDate" in schema.paths

    def test_applying_twice_is_a_fixed_point(self):
        schema = Schema({"make": str, "model": str})
        schema.plugin(last_modified_fields, {"fieldSuffix": SUFFIX})
        first = list(schema.paths)
        schema.plugin(last_modified_fields, {"fieldSuffix": SUFFIX})
        assert list(schema.paths) == first
        assert not any(name.endswith(SUFFIX + SUFFIX) for name in schema.paths)

    def test_select_is_carried_to_shadow_paths(self, make_car_model):
        Car = make_car_model(select=False)
        assert Car.schema.paths["make" + SUFFIX].select is False
        assert "make" + SUFFIX not in Car.schema.selected_paths()
        assert "make" in Car.schema.selected_paths()

    def test_invalid_options_raise_configuration_error(self):
        schema = Schema({"make": str})
        with pytest.raises(ShadowStampError) as exc_info:
            schema.plugin(last_modified_fields, {"fieldSuffix": ""})
        assert exc_info.value.error_code == ErrorCode.CONFIG_INVALID
        assert list(schema.paths) == ["_id", "make", "__v"]


class TestSavingModels:
    """Stamping of shadow fields on save."""

    def test_first_save_stamps_all_set_fields(self, new_car, clock):
        car = new_car.save()
        for name in ("make", "model", "miles"):
            assert car.get(name + SUFFIX) == clock.now

    def test_first_save_does_not_stamp_omitted_fields(self, new_car, clock):
        new_car.save()
        assert new_car.to_object().get("vin" + SUFFIX) is None

    def test_later_saves_only_stamp_changed_fields(self, new_car, clock):
        new_car.save()
        first_save = clock.now

        second_save = clock.advance(2)
        new_car.make = "Volkswagen"
        new_car.model = "Jetta"
        new_car.save()

        assert new_car.get("make" + SUFFIX) == second_save
        assert new_car.get("model" + SUFFIX) == second_save
        assert new_car.get("miles" + SUFFIX) == first_save

    def test_fields_in_one_save_share_one_timestamp(self, new_car, clock):
        new_car.save()
        assert len(clock.calls) == 1
        stamps = {new_car.get(name + SUFFIX) for name in ("make", "model", "miles")}
        assert stamps == {clock.calls[0]}

    def test_overwrite_discards_explicit_shadow_value(self, new_car, clock):
        new_car.save()
        custom = clock.now - timedelta(days=30)
        clock.advance(5)

        new_car.make = "Toyota"
        new_car.set("make" + SUFFIX, custom)
        new_car.save()

        assert new_car.get("make" + SUFFIX) == clock.now

    def test_no_overwrite_preserves_explicit_shadow_value(self, make_car_model, clock):
        Car = make_car_model(omittedFields=["vin"], overwrite=False)
        car = Car(make="Honda", model="Civic", miles=20000).save()
        custom = clock.now - timedelta(days=30)
        clock.advance(5)

        car.make = "Toyota"
        car.set("make" + SUFFIX, custom)
        car.model = "Corolla"
        car.save()

        assert car.get("make" + SUFFIX) == custom
        assert car.get("model" + SUFFIX) == clock.now

    def test_shadow_set_without_tracking_is_not_modified(self, new_car, clock):
        new_car.save()
        custom = clock.now - timedelta(days=1)

        new_car.set("make" + SUFFIX, custom, mark_modified=False)

        assert not new_car.is_modified("make" + SUFFIX)
        assert new_car.modified_paths() == []

    def test_shadow_only_change_stamps_nothing(self, new_car, clock):
        new_car.save()
        first_save = clock.now
        clock.advance(3)

        new_car.set("make" + SUFFIX, first_save - timedelta(days=1))
        new_car.save()

        assert new_car.get("make" + SUFFIX) == first_save - timedelta(days=1)
        assert new_car.get("model" + SUFFIX) == first_save


class TestDefaultValues:
    """Stamping policy for paths that only hold a schema default."""

    @staticmethod
    def _model(**options):
        schema = Schema({"make": str, "miles": {"type": int, "default": 0}})
        schema.plugin(last_modified_fields, {"fieldSuffix": SUFFIX, **options})
        return model("Car", schema)

    def test_defaults_are_not_stamped_by_default(self, clock):
        car = self._model()(make="Honda").save()
        assert car.get("miles") == 0
        assert car.get("miles" + SUFFIX) is None
        assert car.get("make" + SUFFIX) == clock.now

    def test_defaults_are_stamped_when_enabled(self, clock):
        car = self._model(stampDefaults=True)(make="Honda").save()
        assert car.get("miles" + SUFFIX) == clock.now

    def test_defaults_are_only_stamped_on_first_save(self, clock):
        car = self._model(stampDefaults=True)(make="Honda").save()
        first_save = clock.now
        clock.advance(10)

        car.make = "Kia"
        car.save()

        assert car.get("miles" + SUFFIX) == first_save


class TestNestedPaths:
    """Dotted paths are treated like any other path."""

    @pytest.fixture
    def Truck(self):
        schema = Schema({"make": str, "engine": {"cylinders": int, "fuel": str}})
        schema.plugin(last_modified_fields, {"fieldSuffix": SUFFIX, "purgeFromJSON": True})
        return model("Truck", schema)

    def test_nested_shadow_paths(self, Truck):
        assert "engine.cylinders" + SUFFIX in Truck.schema.paths
        assert "engine.fuel" + SUFFIX in Truck.schema.paths
        assert "engine" + SUFFIX not in Truck.schema.paths

    def test_nested_change_stamps_only_that_leaf(self, Truck, clock):
        truck = Truck(make="Ford", engine={"cylinders": 8, "fuel": "diesel"}).save()
        first_save = clock.now
        clock.advance(1)

        truck.set("engine.cylinders", 6)
        truck.save()

        assert truck.get("engine.cylinders" + SUFFIX) == clock.now
        assert truck.get("engine.fuel" + SUFFIX) == first_save

    def test_nested_shadow_fields_purged_from_json(self, Truck, clock):
        truck = Truck(make="Ford", engine={"cylinders": 8}).save()
        assert truck.to_json() == {
            "_id": truck.id,
            "make": "Ford",
            "engine": {"cylinders": 8},
            "__v": 0,
        }
        assert truck.to_object()["engine"]["cylinders" + SUFFIX] == clock.now


class TestOutputRedaction:
    """Independent purge toggles for the two views."""

    def test_purge_from_json_only(self, make_car_model, clock):
        Car = make_car_model(purgeFromJSON=True)
        car = Car(make="Honda", model="Civic", miles=20000).save()

        assert not any(SUFFIX in key for key in car.to_json())
        assert any(SUFFIX in key for key in car.to_object())

    def test_purge_from_object_only(self, make_car_model, clock):
        Car = make_car_model(purgeFromObject=True)
        car = Car(make="Honda", model="Civic", miles=20000).save()

        assert not any(SUFFIX in key for key in car.to_object())
        stamped = car.to_json()["make" + SUFFIX]
        assert isinstance(stamped, str)
        assert stamped.startswith("2024-01-15T12:00:00")

    def test_no_purge_by_default(self, Car, new_car, clock):
        new_car.save()
        assert Car.schema.get_transform(SerializationView.JSON) is None
        assert "make" + SUFFIX in new_car.to_json()

    def test_redaction_does_not_touch_the_document(self, make_car_model, clock):
        Car = make_car_model(purgeFromJSON=True, purgeFromObject=True)
        car = Car(make="Honda").save()
        car.to_json()
        car.to_object()
        assert car.get("make" + SUFFIX) == clock.now
        assert "make" + SUFFIX in Car.schema.paths


class TestAccessors:
    """Schema-level statics exposing the naming convention."""

    def test_suffix_accessor(self, Car):
        assert Car.get_modified_field_suffix() == SUFFIX

    def test_shadow_path_accessor(self, Car):
        assert Car.get_modified_field_paths() == [
            "make" + SUFFIX,
            "model" + SUFFIX,
            "miles" + SUFFIX,
        ]

    def test_accessors_on_schema_statics(self, car_schema):
        car_schema.plugin(last_modified_fields, {"fieldSuffix": "_changedAt"})
        assert car_schema.statics["get_modified_field_suffix"]() == "_changedAt"
        assert "vin_changedAt" in car_schema.statics["get_modified_field_paths"]()


class TestShadowFieldAugmentor:
    """Using the augmentor steps directly."""

    def test_accepts_prepared_settings(self, car_schema):
        settings = ShadowFieldSettings(field_suffix=SUFFIX, purge_from_object=True)
        car_schema.plugin(last_modified_fields, settings)
        assert "make" + SUFFIX in car_schema.paths
        assert car_schema.get_transform(SerializationView.OBJECT) is not None

    def test_environment_defaults(self, monkeypatch, car_schema):
        monkeypatch.setenv("SHADOW_FIELD_SUFFIX", "_touched")
        car_schema.plugin(last_modified_fields)
        assert "make_touched" in car_schema.paths

    def test_derive_leaves_input_definition_untouched(self, car_schema):
        augmentor = ShadowFieldAugmentor(ShadowFieldSettings(field_suffix=SUFFIX))
        before = car_schema.definition
        after = augmentor.derive(before)
        assert after is not before
        assert before.shadow_paths() == []
        assert len(after.shadow_paths()) == 4

    def test_purged_views(self):
        augmentor = ShadowFieldAugmentor(
            ShadowFieldSettings(purge_from_json=True, purge_from_object=True)
        )
        assert augmentor.purged_views() == [SerializationView.OBJECT, SerializationView.JSON]

    def test_schema_cannot_change_after_compile(self, car_schema):
        model("Car", car_schema)
        with pytest.raises(ShadowStampError) as exc_info:
            car_schema.plugin(last_modified_fields, {"fieldSuffix": SUFFIX})
        assert exc_info.value.error_code == ErrorCode.SCHEMA_ERROR


class TestSuffixedUserPaths:
    """User paths carrying the suffix are shadow fields of their base path."""

    @pytest.fixture
    def Car(self):
        schema = Schema({"make": str, "make" + SUFFIX: datetime, "model": str})
        schema.plugin(last_modified_fields, {"fieldSuffix": SUFFIX})
        return model("Car", schema)

    def test_listed_by_accessor(self, Car):
        assert Car.get_modified_field_paths() == ["make" + SUFFIX, "model" + SUFFIX]

    def test_stamped_on_save(self, Car, clock):
        car = Car(make="Honda", model="Civic").save()
        assert car.get("make" + SUFFIX) == clock.now
        assert car.get("model" + SUFFIX) == clock.now
        assert not Car.schema.paths["make" + SUFFIX].is_shadow


class TestMultipleSuffixes:
    """Applying the plugin twice with different suffixes."""

    @pytest.fixture
    def Car(self):
        schema = Schema({"make": str, "model": str})
        schema.plugin(last_modified_fields, {"fieldSuffix": "_A"})
        schema.plugin(last_modified_fields, {"fieldSuffix": "_B"})
        return model("Car", schema)

    def test_no_shadow_of_a_shadow(self, Car):
        assert "make_A" in Car.schema.paths
        assert "make_B" in Car.schema.paths
        assert "make_A_B" not in Car.schema.paths

    def test_both_shadows_stamped(self, Car, clock):
        car = Car(make="Honda").save()
        assert car.get("make_A") == clock.now
        assert car.get("make_B") == clock.now
        assert car.get("model_A") is None
