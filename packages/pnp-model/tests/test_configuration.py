"""
Тесты реестра Configuration: слушатели, загрузка снимков, каталоги
"""

import pytest

from pnp_model import (
    BottomVisionSettings,
    Configuration,
    ConfigurationLoadError,
    ConfigurationRecord,
    DuplicateIdError,
    NozzleTip,
    NozzleTipRecord,
    Package,
    PackageRecord,
    Part,
    PartRecord,
)
from pnp_model.models.vision import STOCK_BOTTOM_ID


class TestListeners:
    """Тесты подписки на загрузку конфигурации"""

    def test_listener_fires_on_every_load(self):
        configuration = Configuration()
        calls = []
        configuration.add_listener(calls.append)

        configuration.load(ConfigurationRecord())
        configuration.load(ConfigurationRecord())

        assert calls == [configuration, configuration]

    def test_listener_added_after_load_fires_immediately(self, configuration):
        calls = []

        configuration.add_listener(calls.append)

        assert calls == [configuration]

    def test_independent_listeners(self):
        """Несколько слушателей работают независимо"""
        configuration = Configuration()
        first, second = [], []
        handle = configuration.add_listener(first.append)
        configuration.add_listener(second.append)

        configuration.fire_configuration_loaded()
        handle.dispose()
        configuration.fire_configuration_loaded()

        assert len(first) == 1
        assert len(second) == 2
        assert handle.disposed

    def test_handle_as_context_manager(self):
        configuration = Configuration()
        calls = []

        with configuration.add_listener(calls.append):
            configuration.fire_configuration_loaded()
        configuration.fire_configuration_loaded()

        assert len(calls) == 1

    def test_failing_listener_does_not_stop_others(self):
        configuration = Configuration()
        calls = []

        def failing(_):
            raise RuntimeError("boom")

        configuration.add_listener(failing)
        configuration.add_listener(calls.append)
        configuration.fire_configuration_loaded()

        assert calls == [configuration]


class TestLoad:
    """Тесты загрузки снимка"""

    def test_load_builds_catalogs(self, configuration):
        assert configuration.is_loaded()
        assert [t.get_id() for t in configuration.get_machine().get_nozzle_tips()] == [
            "N1",
            "N2",
            "N3",
        ]
        assert configuration.get_machine().get_nozzle_tip("N1").get_name() == "Juki 502"
        assert configuration.get_machine().get_nozzle_tip(None) is None
        assert configuration.get_default_vision_settings().get_id() == "V2"

    def test_stock_settings_are_default_without_declaration(self):
        """Без объявленного умолчания используются встроенные настройки"""
        configuration = Configuration()
        configuration.load(ConfigurationRecord())

        default = configuration.get_default_vision_settings()
        assert default.get_id() == STOCK_BOTTOM_ID
        assert default.get_cv_pipeline().get_stage("threshold") is not None

    def test_default_id_must_be_declared(self):
        with pytest.raises(ValueError):
            ConfigurationRecord(default_vision_settings_id="NOPE")

    def test_packages_and_parts_are_linked(self, configuration_record):
        configuration_record.packages.append(
            PackageRecord(id="PKG1", bottom_vision_id="V1")
        )
        configuration_record.parts.append(
            PartRecord(id="R1", package_id="PKG1", bottom_vision_id="V1")
        )
        configuration = Configuration()

        configuration.load(configuration_record)

        package = configuration.get_package("PKG1")
        part = configuration.get_part("R1")
        assert part.get_package() is package
        assert part.get_vision_settings() is configuration.get_vision_settings("V1")
        assert package.get_vision_settings() is configuration.get_vision_settings("V1")

    def test_part_with_unknown_package_fails(self):
        record = ConfigurationRecord(parts=[PartRecord(id="R1", package_id="GONE")])

        with pytest.raises(ConfigurationLoadError) as exc_info:
            Configuration().load(record)

        assert exc_info.value.details["package_id"] == "GONE"
        assert "package_id=GONE" in str(exc_info.value)

    def test_duplicate_nozzle_tip_fails(self):
        record = ConfigurationRecord(
            nozzle_tips=[NozzleTipRecord(id="N1"), NozzleTipRecord(id="N1")]
        )

        with pytest.raises(DuplicateIdError) as exc_info:
            Configuration().load(record)

        assert exc_info.value.object_type == "NozzleTip"
        assert exc_info.value.object_id == "N1"

    def test_reload_unsubscribes_previous_packages(self, configuration_record):
        """Перезагрузка отписывает компоненты прошлого снимка"""
        configuration_record.packages.append(PackageRecord(id="PKG1"))
        configuration = Configuration()
        configuration.load(configuration_record)
        listeners_after_first = configuration.get_listener_count()
        old_package = configuration.get_package("PKG1")

        configuration.load(configuration_record)

        assert configuration.get_listener_count() == listeners_after_first
        assert configuration.get_package("PKG1") is not old_package

    @pytest.mark.parametrize(
        "bad_record",
        [
            ConfigurationRecord(packages=[PackageRecord(id="A"), PackageRecord(id="A")]),
            ConfigurationRecord(
                packages=[PackageRecord(id="A")],
                parts=[PartRecord(id="R1", package_id="GONE")],
            ),
        ],
        ids=["duplicate_package", "unknown_part_package"],
    )
    def test_failed_load_keeps_previous_snapshot(self, configuration_record, bad_record):
        """Ошибка загрузки не трогает текущий снимок и не оставляет подписок"""
        configuration_record.packages.append(PackageRecord(id="PKG1"))
        configuration = Configuration()
        configuration.load(configuration_record)
        old_package = configuration.get_package("PKG1")
        listeners = configuration.get_listener_count()

        with pytest.raises((DuplicateIdError, ConfigurationLoadError)):
            configuration.load(bad_record)

        assert configuration.is_loaded()
        assert configuration.get_listener_count() == listeners
        assert configuration.get_package("PKG1") is old_package
        assert configuration.get_package("A") is None
        assert configuration.get_machine().get_nozzle_tip("N1") is not None
        assert configuration.get_default_vision_settings().get_id() == "V2"

        configuration.load(ConfigurationRecord())

        assert configuration.get_listener_count() == 0

    def test_failed_first_load_stays_unloaded(self):
        configuration = Configuration()

        with pytest.raises(DuplicateIdError):
            configuration.load(
                ConfigurationRecord(
                    packages=[PackageRecord(id="A"), PackageRecord(id="A")]
                )
            )

        assert not configuration.is_loaded()
        assert configuration.get_listener_count() == 0

    def test_to_record_round_trip(self, configuration_record):
        configuration_record.packages.append(
            PackageRecord(id="PKG1", compatible_nozzle_tip_ids=["N1"])
        )
        configuration_record.parts.append(PartRecord(id="R1", package_id="PKG1"))
        configuration = Configuration()
        configuration.load(configuration_record)

        record = configuration.to_record()

        # persist() подставил id настроек по умолчанию
        assert record.packages[0].bottom_vision_id == "V2"
        assert record.packages[0].compatible_nozzle_tip_ids == ["N1"]
        assert record.parts[0].package_id == "PKG1"
        assert [s.id for s in record.vision_settings] == ["V1", "V2"]
        assert record.default_vision_settings_id == "V2"


class TestCatalogs:
    """Тесты регистрации записей"""

    def test_duplicate_package_fails(self, configuration, package):
        """Отклоненный компонент отписывается от загрузок"""
        listeners = configuration.get_listener_count()
        rejected = Package("PKG1", configuration)

        with pytest.raises(DuplicateIdError):
            configuration.add_package(rejected)

        assert configuration.get_listener_count() == listeners
        assert configuration.get_package("PKG1") is package

        configuration.load(ConfigurationRecord())

        assert configuration.get_listener_count() == 0

    def test_remove_package_unsubscribes(self, configuration, package):
        count = configuration.get_listener_count()

        configuration.remove_package(package)

        assert configuration.get_package("PKG1") is None
        assert configuration.get_listener_count() == count - 1

    def test_set_default_vision_settings_adds_settings(self, configuration):
        settings = BottomVisionSettings(id="V3")

        configuration.set_default_vision_settings(settings)

        assert configuration.get_vision_settings("V3") is settings
        assert configuration.get_default_vision_settings() is settings

    def test_lookup_misses_return_none(self, configuration):
        assert configuration.get_vision_settings(None) is None
        assert configuration.get_vision_settings("NOPE") is None
        assert configuration.get_package("NOPE") is None
        assert configuration.get_part(None) is None
        assert configuration.get_pipeline("NOPE") is None

    def test_assign_vision_settings_to_part(self, configuration, package, events):
        part = Part("R1", package=package)
        part.add_property_change_listener(events.append)
        settings = configuration.get_vision_settings("V1")

        configuration.assign_vision_settings_to_part(part, settings)

        assert part.get_vision_settings() is settings
        assert [e.property_name for e in events] == ["vision_settings"]

    def test_nozzle_tip_equality_by_id(self):
        assert NozzleTip("N1") == NozzleTip("N1", name="other")
        assert len({NozzleTip("N1"), NozzleTip("N1")}) == 1
