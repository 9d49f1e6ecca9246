"""Store listing pages, read from the cached catalog snapshot."""

from flask import Blueprint, render_template

from ..errors import EntityNotFound
from ..state import get_filament_database

bp = Blueprint('store', __name__, url_prefix='/Store')


@bp.get('/')
def store_index():
    filament_data = get_filament_database()
    return render_template(
        'stores.html',
        stores=list(filament_data.stores.values()),
        stats=filament_data.stats(),
    )


@bp.get('/<store>')
def store_page(store: str):
    filament_data = get_filament_database()
    key = filament_data.stores.find_key(store)
    if key is None:
        raise EntityNotFound('store', store)
    return render_template('store.html', store_data=filament_data.stores[key])
