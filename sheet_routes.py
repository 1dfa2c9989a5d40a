"""Flask routes for the sheet editor.

This module contains the JSON API for laying out practice sheets and for
previewing cell guides.
"""

import io
import logging

from flask import Response, jsonify, request, send_file

from sheet_flask import (
    DEFAULT_PREVIEW_SCALE, MAX_GUIDE_SIZE, MAX_PREVIEW_SIDE, app, error_response,
    get_annotation_provider, parse_float_arg, parse_settings_or_error, validate_sheet_size,
    validate_text_param,
)
from sheet_lib.api import SheetService
from sheet_lib.errors import SheetError
from sheet_lib.guides import DEFAULT_REGISTRY, guide_to_svg
from sheet_lib.utils import render_guide_png

logger = logging.getLogger(__name__)

_service = SheetService()

# Query parameters of the guide and capacity routes, mapped onto settings.
_QUERY_ALIASES = {
    'size': 'grid_size',
    'sublines': 'show_sublines',
    'repeat': 'repeat_count',
    'layout': 'layout_type',
    'paper': 'paper_size',
}
_MARGIN_ARGS = ('margin_top', 'margin_right', 'margin_bottom', 'margin_left')


def _settings_from_args(args, **overrides):
    data = {}
    margins = {}
    for key, value in args.items():
        if key in _MARGIN_ARGS:
            margins[key[len('margin_'):]] = value
        else:
            data[_QUERY_ALIASES.get(key, key)] = value
    if margins:
        data['margins'] = margins
    data.update(overrides)
    return parse_settings_or_error(data)


@app.errorhandler(SheetError)
def handle_sheet_error(e):
    logger.warning("Request rejected: %s", e)
    return error_response(str(e))


@app.route('/api/sheet', methods=['POST'])
def api_sheet():
    data = request.get_json(silent=True)
    if data is None:
        return error_response("Expected a JSON body")
    if not isinstance(data, dict):
        return error_response("JSON body must be an object")
    text = data.get('text', '')
    ok, err = validate_text_param(text)
    if not ok:
        return err
    settings, err = parse_settings_or_error(data.get('settings'))
    if err:
        return err
    ok, err = validate_sheet_size(text or '', settings)
    if not ok:
        return err

    provider = get_annotation_provider() if data.get('annotate', True) else None
    sheet = _service.build_sheet(text or '', settings, provider)
    return jsonify(sheet.to_dict())


@app.route('/api/guides')
def api_guide_styles():
    return jsonify(styles=DEFAULT_REGISTRY.list_styles(), fallback=DEFAULT_REGISTRY.fallback)


@app.route('/api/guide/<grid_type>')
def api_guide(grid_type):
    """Guide descriptor for one cell.

    ``<grid_type>.svg`` and ``<grid_type>.png`` return the guide as an SVG
    document or a PNG preview instead of JSON.
    """
    name, _, ext = grid_type.partition('.')
    if ext not in ('', 'svg', 'png'):
        return error_response(f"Unsupported guide format: {ext}", 404)

    settings, err = _settings_from_args(request.args, grid_type=name)
    if err:
        return err
    if settings.grid_size > MAX_GUIDE_SIZE:
        return error_response(f"Guide size larger than {MAX_GUIDE_SIZE:g}")
    guide = _service.guide(settings, grid_type=name)

    if ext == 'svg':
        background = request.args.get('background') or None
        return Response(guide_to_svg(guide, background=background), mimetype='image/svg+xml')
    if ext == 'png':
        scale, err = parse_float_arg(request.args, 'scale', DEFAULT_PREVIEW_SCALE)
        if err:
            return err
        if not 0 < scale <= 16:
            return error_response("Query parameter 'scale' must be in (0, 16]")
        if guide.size * scale > MAX_PREVIEW_SIDE:
            return error_response(f"Preview larger than {MAX_PREVIEW_SIDE}px; lower size or scale")
        png = render_guide_png(guide, scale=scale)
        return send_file(io.BytesIO(png), mimetype='image/png')
    return jsonify(guide.to_dict())


@app.route('/api/capacity')
def api_capacity():
    settings, err = _settings_from_args(request.args)
    if err:
        return err
    capacity = _service.capacity(settings)
    return jsonify(capacity.to_dict())
