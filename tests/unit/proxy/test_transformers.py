"""
Tests unitaires des transformations de bodies et réponses.
"""
import pytest

from gamehub_proxy.core.constants import GENERIC_CLIENT_PARAMS, PASSTHROUGH_SCRIPT_FIELDS
from gamehub_proxy.proxy.transformers import (
    coerce_int,
    int_or_default,
    manifest_path_for_type,
    normalize_manifest,
    paginate_items,
    paginate_manifest,
    sanitize_script_body,
    strip_game_detail,
)


class TestCoercion:
    """Conversion des champs numériques."""

    def test_coerce_int(self):
        assert coerce_int(3) == 3
        assert coerce_int(3.0) == 3
        assert coerce_int("7") == 7
        assert coerce_int("abc") is None
        assert coerce_int(True) is None
        assert coerce_int(None) is None

    def test_int_or_default(self):
        assert int_or_default(None, 1) == 1
        assert int_or_default(0, 4) == 4
        assert int_or_default("2", 1) == 2
        assert int_or_default(5, 1) == 5


class TestManifestType:
    """Mapping type -> manifest."""

    @pytest.mark.parametrize("component_type,path", [
        (1, "/components/box64_manifest"),
        (2, "/components/drivers_manifest"),
        (3, "/components/dxvk_manifest"),
        (4, "/components/vkd3d_manifest"),
        (5, "/components/games_manifest"),
        (6, "/components/libraries_manifest"),
        (7, "/components/steam_manifest"),
    ])
    def test_known_types(self, component_type, path):
        assert manifest_path_for_type(component_type) == path

    def test_numeric_string_type(self):
        assert manifest_path_for_type("3") == "/components/dxvk_manifest"

    @pytest.mark.parametrize("component_type", [None, 0, 8, 99, "x", True])
    def test_unknown_types(self, component_type):
        assert manifest_path_for_type(component_type) is None


class TestGameDetail:
    """Nettoyage de la fiche jeu."""

    def test_strips_recommendations(self):
        response = {
            "code": 200,
            "data": {"name": "Hades", "recommend_game": [1], "card_line_data": [2]}
        }
        assert strip_game_detail(response) == {"code": 200, "data": {"name": "Hades"}}

    def test_without_data_unchanged(self):
        response = {"code": 401, "msg": "token invalid", "data": None}
        assert strip_game_detail(response) == {"code": 401, "msg": "token invalid", "data": None}


class TestSanitizeScriptBody:
    """Retrait de l'empreinte appareil."""

    def test_only_sanitized_fields(self):
        body = {
            "gpu_vendor": "Qualcomm",
            "gpu_version": 740,
            "gpu_device_name": "Adreno (TM) 740",
            "gpu_system_driver_version": 615,
            "device_model": "SM-S918B",
            "game_id": "12345",
            "game_type": 1,
            "token": "tok",
            "sign": "sig",
            "time": "1700000000",
            "clientparams": "5.1.0|1|fr|SM-S918B|3088*1440|...",
        }
        assert sanitize_script_body(body) == {
            "gpu_vendor": "Qualcomm",
            "gpu_version": 0,
            "gpu_device_name": "Generic Device",
            "game_type": 1,
            "token": "tok",
            "game_id": "0",
            "sign": "sig",
            "time": "1700000000",
            "clientparams": GENERIC_CLIENT_PARAMS,
            "gpu_system_driver_version": 0,
        }

    def test_default_game_type(self):
        assert sanitize_script_body({"gpu_vendor": "ARM"})["game_type"] == 2

    def test_missing_fields_omitted(self):
        sanitized = sanitize_script_body({"gpu_vendor": "ARM"})
        assert "token" not in sanitized
        assert "sign" not in sanitized
        assert "time" not in sanitized

    def test_null_fields_kept(self):
        assert sanitize_script_body({"token": None})["token"] is None

    def test_passthrough_fields_copied(self):
        body = {name: f"v-{name}" for name in PASSTHROUGH_SCRIPT_FIELDS}
        sanitized = sanitize_script_body(dict(body, game_id=7))
        for name in PASSTHROUGH_SCRIPT_FIELDS:
            assert sanitized[name] == body[name]
        assert sanitized["game_id"] == "0"


class TestManifest:
    """Normalisation et pagination des manifests."""

    def test_components_renamed_to_list(self):
        manifest = {"data": {"components": [1, 2]}}
        assert normalize_manifest(manifest) == {"data": {"list": [1, 2]}}

    def test_existing_list_untouched(self):
        manifest = {"data": {"list": [1, 2]}}
        assert normalize_manifest(manifest) == {"data": {"list": [1, 2]}}

    @pytest.mark.parametrize("length,page,page_size", [
        (25, 1, 10),
        (25, 3, 10),
        (25, 4, 10),
        (0, 1, 10),
        (7, 2, 7),
    ])
    def test_page_length(self, length, page, page_size):
        items = list(range(length))
        expected = min(page_size, max(0, length - (page - 1) * page_size))
        assert len(paginate_items(items, page, page_size)) == expected

    def test_paginate_sets_metadata(self):
        manifest = {"data": {"list": list(range(25))}}
        result = paginate_manifest(manifest, 3, 10)
        assert result["data"] == {
            "list": [20, 21, 22, 23, 24],
            "page": 3,
            "pageSize": 10,
            "total": 25,
        }

    def test_upstream_total_preferred(self):
        manifest = {"data": {"list": list(range(5)), "total": 40}}
        assert paginate_manifest(manifest, 1, 2)["data"]["total"] == 40

    def test_without_list_unchanged(self):
        manifest = {"code": 200, "data": {"version": 3}}
        assert paginate_manifest(manifest, 1, 10) == {"code": 200, "data": {"version": 3}}
