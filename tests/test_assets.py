from pathlib import Path

import pytest

from globe_search.assets import CSS_FILENAME, HTML_FILENAME, WidgetAssets, load_assets
from globe_search.exceptions import AssetLoadError


def test_load_packaged_assets():
    assets = load_assets()
    assert "globe-search-root" in assets.html
    assert ".globe-search" in assets.css


def test_body_embeds_stylesheet():
    assets = WidgetAssets(html="  <div>hi</div>\n", css="\n.a { color: red; }\n")
    assert assets.body == "<div>hi</div>\n<style>\n.a { color: red; }\n</style>"


def test_missing_css_is_fatal(tmp_path: Path):
    (tmp_path / HTML_FILENAME).write_text("<div></div>", encoding="utf-8")

    with pytest.raises(AssetLoadError) as excinfo:
        load_assets(tmp_path)

    assert excinfo.value.path == tmp_path / CSS_FILENAME


def test_missing_html_is_fatal(tmp_path: Path):
    (tmp_path / CSS_FILENAME).write_text(".a {}", encoding="utf-8")

    with pytest.raises(AssetLoadError) as excinfo:
        load_assets(tmp_path)

    assert excinfo.value.path == tmp_path / HTML_FILENAME
    assert HTML_FILENAME in str(excinfo.value)


def test_undecodable_asset_is_fatal(tmp_path: Path):
    (tmp_path / HTML_FILENAME).write_bytes(b"\xff\xfe\xfa")
    (tmp_path / CSS_FILENAME).write_text(".a {}", encoding="utf-8")

    with pytest.raises(AssetLoadError):
        load_assets(tmp_path)
