"""Tests for form parsing and validation."""

from werkzeug.datastructures import MultiDict

from ofd_webui.forms import FilamentForm, VariantForm, form_from_attributes, parse_form


def test_filament_form_parses_and_coerces():
    result = parse_form(FilamentForm, MultiDict([
        ('name', ' PolyLite '),
        ('density', '1.24'),
        ('max_dry_temperature', '55'),
        ('data_sheet_url', 'https://acme.example/tds.pdf'),
    ]))

    assert result.valid
    assert result.data == {
        'name': 'PolyLite',
        'density': 1.24,
        'max_dry_temperature': 55,
        'data_sheet_url': 'https://acme.example/tds.pdf',
    }


def test_blank_inputs_are_unset():
    result = parse_form(FilamentForm, MultiDict([('name', 'PolyLite'), ('density', '  ')]))

    assert result.valid
    assert result.data == {'name': 'PolyLite', 'density': None}


def test_unknown_fields_are_ignored():
    result = parse_form(FilamentForm, MultiDict([('name', 'PolyLite'), ('intent', 'filament')]))

    assert result.data == {'name': 'PolyLite'}


def test_checkbox_last_value_wins():
    checked = parse_form(FilamentForm, MultiDict([
        ('name', 'PolyLite'), ('discontinued', 'false'), ('discontinued', 'true'),
    ]))
    unchecked = parse_form(FilamentForm, MultiDict([('name', 'PolyLite'), ('discontinued', 'false')]))

    assert checked.data['discontinued'] is True
    assert unchecked.data['discontinued'] is False


def test_invalid_filament_fields_are_reported_per_field():
    result = parse_form(FilamentForm, MultiDict([
        ('name', 'Poly/Lite'),
        ('density', '-1'),
        ('safety_sheet_url', 'ftp://acme.example/sds.pdf'),
    ]))

    assert not result.valid
    assert set(result.errors) == {'name', 'density', 'safety_sheet_url'}
    assert result.errors['safety_sheet_url'] == ["Must be an http(s) URL"]
    assert result.raw['density'] == '-1'


def test_missing_name_is_an_error():
    result = parse_form(FilamentForm, MultiDict([('density', '1.2')]))

    assert not result.valid
    assert 'name' in result.errors


def test_blank_name_is_required():
    result = parse_form(FilamentForm, MultiDict([('name', '   '), ('density', '1.2')]))

    assert result.errors == {'name': ["Name is required"]}


def test_blank_color_name_is_required():
    result = parse_form(VariantForm, MultiDict([('color_name', ''), ('color_hex', '#FF0000')]))

    assert result.errors == {'color_name': ["Name is required"]}


def test_variant_hex_is_normalized():
    result = parse_form(VariantForm, MultiDict([('color_name', 'Red'), ('color_hex', 'ff00aa')]))

    assert result.valid
    assert result.data['color_hex'] == '#FF00AA'


def test_variant_rejects_bad_hex():
    result = parse_form(VariantForm, MultiDict([('color_name', 'Red'), ('color_hex', 'red')]))

    assert result.errors == {'color_hex': ["Must be a hex color like #1A2B3C"]}


def test_form_from_attributes_prefills_known_fields():
    result = form_from_attributes(FilamentForm, {'name': 'PolyLite', 'density': 1.24, 'extra': 1})

    assert result.raw == {'name': 'PolyLite', 'density': 1.24}
