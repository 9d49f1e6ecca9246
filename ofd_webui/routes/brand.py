"""
Filament and color variant pages with their edit form actions.

GET  /Brand/<brand>/<material>/<filament>            filament page
POST /Brand/<brand>/<material>/<filament>?/filament  update the filament
POST /Brand/<brand>/<material>/<filament>?/variant   create/update a color
GET  /Brand/<brand>/<material>/<filament>/<variant>  color variant page

Names in the URL are matched case- and whitespace-insensitively.
"""

import logging
from typing import Optional

from flask import Blueprint, abort, flash, redirect, render_template, request, url_for

from ..catalog import ResolvedChain, resolve_chain
from ..errors import DuplicateName
from ..forms import FilamentForm, FormResult, VariantForm, form_from_attributes, parse_form
from ..state import get_filament_database, get_settings, refresh_database
from ..store.writer import create_color_files, remove_unset, strip_illegal_chars, update_filament

logger = logging.getLogger(__name__)

bp = Blueprint('brand', __name__, url_prefix='/Brand')


def _form_intent() -> Optional[str]:
    """Action name from a hidden `intent` field or a `?/name` query string."""
    intent = request.form.get('intent')
    if intent:
        return intent
    for key in request.args:
        if key.startswith('/'):
            return key[1:]
    return None


def _variant_form_from(variant) -> FormResult:
    attributes = dict(variant.attributes)
    attributes.setdefault('color_name', variant.color_name)
    return form_from_attributes(VariantForm, attributes)


def _render_filament(chain: ResolvedChain, filament_form: FormResult,
                     variant_form: Optional[FormResult] = None, status: int = 200):
    return render_template(
        'filament.html',
        brand_data=chain.brand,
        material_data=chain.material,
        filament_data=chain.filament,
        chain=chain,
        filament_form=filament_form,
        filament_variant_form=variant_form or FormResult(valid=True),
    ), status


@bp.get('/<brand>/<material>/<filament>')
def filament_page(brand: str, material: str, filament: str):
    chain = resolve_chain(get_filament_database(), [brand, material, filament])
    return _render_filament(chain, form_from_attributes(FilamentForm, chain.filament.attributes))


@bp.post('/<brand>/<material>/<filament>')
def filament_actions(brand: str, material: str, filament: str):
    intent = _form_intent()
    if intent == 'filament':
        return update_filament_action(brand, material, filament)
    if intent == 'variant':
        return variant_action(brand, material, filament)
    abort(400, f"Unknown form action: {intent!r}")


def update_filament_action(brand: str, material: str, filament: str):
    chain = resolve_chain(get_filament_database(), [brand, material, filament])
    form = parse_form(FilamentForm, request.form)
    if not form.valid:
        return _render_filament(chain, form, status=400)

    try:
        new_key = update_filament(
            get_settings().data_root,
            chain.brand_key, chain.material_key, chain.filament_key,
            remove_unset(form.data),
        )
        refresh_database()
    except DuplicateName as e:
        form.valid = False
        form.errors.setdefault('name', []).append(e.message)
        return _render_filament(chain, form, status=e.status)
    except Exception:
        logger.exception("Failed to update filament")
        flash('Failed to update filament. Please try again.', 'error')
        return _render_filament(chain, form, status=500)

    flash('Filament updated successfully!', 'success')
    return redirect(url_for(
        'brand.filament_page',
        brand=strip_illegal_chars(brand), material=material, filament=new_key,
    ), code=303)


def variant_action(brand: str, material: str, filament: str):
    chain = resolve_chain(get_filament_database(), [brand, material, filament])
    form = parse_form(VariantForm, request.form)
    filament_form = form_from_attributes(FilamentForm, chain.filament.attributes)
    if not form.valid:
        return _render_filament(chain, filament_form, form, status=400)

    try:
        variant_key = create_color_files(
            get_settings().data_root,
            chain.brand_key, chain.material_key, chain.filament_key,
            remove_unset(form.data),
        )
        refresh_database()
    except DuplicateName as e:
        form.valid = False
        form.errors.setdefault('color_name', []).append(e.message)
        return _render_filament(chain, filament_form, form, status=e.status)
    except Exception:
        logger.exception("Failed to update color")
        flash('Failed to update color. Please try again.', 'error')
        return _render_filament(chain, filament_form, form, status=500)

    flash('Color updated successfully!', 'success')
    return redirect(url_for(
        'brand.variant_page',
        brand=strip_illegal_chars(brand), material=material,
        filament=filament, variant=variant_key,
    ), code=303)


@bp.get('/<brand>/<material>/<filament>/<variant>')
def variant_page(brand: str, material: str, filament: str, variant: str):
    chain = resolve_chain(get_filament_database(), [brand, material, filament, variant])
    return render_template(
        'variant.html',
        brand_data=chain.brand,
        material_data=chain.material,
        filament_data=chain.filament,
        variant_data=chain.variant,
        chain=chain,
        filament_variant_form=_variant_form_from(chain.variant),
    )
