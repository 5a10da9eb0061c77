# packages/pnp-model/tests/conftest.py

import pytest

from pnp_model import (
    BottomVisionSettings,
    Configuration,
    ConfigurationRecord,
    CvPipeline,
    CvStage,
    NozzleTipRecord,
    Package,
)


@pytest.fixture
def vision_settings_v1():
    """Настройки зрения V1"""
    return BottomVisionSettings(
        id="V1",
        name="Small chips",
        cv_pipeline=CvPipeline(stages=[CvStage(name="image", type="ImageCapture")]),
    )


@pytest.fixture
def vision_settings_v2():
    """Настройки зрения V2"""
    return BottomVisionSettings(id="V2", name="QFN", pre_rotate=True)


@pytest.fixture
def configuration_record(vision_settings_v1, vision_settings_v2):
    """Снимок с тремя nozzle tip и двумя наборами настроек зрения"""
    return ConfigurationRecord(
        nozzle_tips=[
            NozzleTipRecord(id="N1", name="Juki 502"),
            NozzleTipRecord(id="N2", name="Juki 503"),
            NozzleTipRecord(id="N3"),
        ],
        vision_settings=[vision_settings_v1, vision_settings_v2],
        default_vision_settings_id="V2",
    )


@pytest.fixture
def configuration(configuration_record):
    """Загруженная конфигурация"""
    configuration = Configuration()
    configuration.load(configuration_record)
    return configuration


@pytest.fixture
def package(configuration):
    """Компонент, зарегистрированный в загруженной конфигурации"""
    package = Package("PKG1", configuration)
    configuration.add_package(package)
    return package


@pytest.fixture
def events():
    """Список для сбора событий изменения свойств"""
    return []
