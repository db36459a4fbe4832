#!/usr/bin/env python3
"""
Display Mount Planner - Web Interface
Pick a screen, mount, media player and receptacle box, preview the scaled
wall diagram and download it as a PDF

Endpoints:
  GET  /                 - Landing page
  GET  /planner          - Planner page (catalog rendered into the form)
  GET  /api/equipment    - Full equipment catalog as JSON
  GET  /api/niche        - Niche dimensions for the current selection
  GET  /api/diagram.png  - Rendered diagram for the current selection
  POST /api/export.pdf   - PDF drawing with project title block
"""

import io
import math
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, current_app, jsonify, render_template, request, send_file

from catalog_parser import load_catalog
from diagram_renderer import DEFAULT_SURFACE_HEIGHT, DEFAULT_SURFACE_WIDTH, DrawingSurface, render_diagram
from equipment import Category, EquipmentCatalog
from niche_calculator import calculate_niche_size
from pdf_generator import DEFAULT_PDF_FILENAME, generate_planner_pdf
from selection import ProjectInfo, SelectionState

# Load settings from .env file
load_dotenv()
load_dotenv(Path(__file__).parent / ".env")

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_PORT = 3000

MIN_SURFACE_PX = 100
MAX_SURFACE_PX = 4000

CATALOG_KEY = 'equipment_catalog'


def get_catalog() -> EquipmentCatalog:
    """Catalog injected into the running app by create_app()"""
    return current_app.extensions[CATALOG_KEY]


def surface_size(params) -> tuple:
    """Requested surface size in pixels, clamped to a sane range"""
    def dimension(name, default):
        try:
            number = float(params.get(name, default))
        except (TypeError, ValueError):
            return default
        if not math.isfinite(number):
            return default
        value = int(number)
        return max(MIN_SURFACE_PX, min(MAX_SURFACE_PX, value))

    return dimension('width', DEFAULT_SURFACE_WIDTH), dimension('height', DEFAULT_SURFACE_HEIGHT)


def render_selection(params) -> tuple:
    """Fresh surface with the diagram for the given request parameters"""
    selection = SelectionState.from_params(params, get_catalog())
    width, height = surface_size(params)
    surface = DrawingSurface(width, height)
    render_diagram(surface, selection)
    return surface, selection


def create_app(catalog: Optional[EquipmentCatalog] = None, data_dir=None) -> Flask:
    """
    Build the Flask app.

    Args:
        catalog: Pre-built catalog (loaded from data_dir when omitted)
        data_dir: Directory holding the catalog CSVs (defaults to ./data)

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)

    if catalog is None:
        catalog = load_catalog(data_dir or DATA_DIR)
    app.extensions[CATALOG_KEY] = catalog

    @app.before_request
    def log_request():
        print(f"{request.method} {request.path}")

    @app.route('/')
    def home():
        return render_template('home.html')

    @app.route('/planner')
    def planner():
        catalog = get_catalog()
        selection = SelectionState.from_params(request.args, catalog)
        return render_template(
            'planner.html',
            catalog=catalog,
            categories=Category,
            selection=selection.to_params(),
        )

    @app.route('/api/equipment')
    def equipment():
        catalog = get_catalog()
        print(f"📤 Equipment data being sent: {catalog.counts()}")
        return jsonify(catalog.to_dict())

    @app.route('/api/niche')
    def niche():
        selection = SelectionState.from_params(request.args, get_catalog())
        niche_size = calculate_niche_size(
            selection.screen,
            selection.media_player,
            selection.mount,
            selection.niche_depth_variance,
        )
        return jsonify(niche_size.to_dict())

    @app.route('/api/diagram.png')
    def diagram():
        surface, _ = render_selection(request.args)
        return send_file(io.BytesIO(surface.to_png()), mimetype='image/png', max_age=0)

    @app.route('/api/export.pdf', methods=['POST'])
    def export_pdf():
        try:
            surface, selection = render_selection(request.form)
            project = ProjectInfo.from_params(request.form, selection)
            pdf_bytes = generate_planner_pdf(surface, project)
        except Exception as e:
            print(f"❌ Error generating PDF: {e}")
            return jsonify({
                'success': False,
                'error': 'Error generating PDF. Please check the server log for details.',
            }), 500

        print(f"✅ Generated PDF for: {project.title}")
        return send_file(
            io.BytesIO(pdf_bytes),
            mimetype='application/pdf',
            as_attachment=True,
            download_name=DEFAULT_PDF_FILENAME,
        )

    return app


def main():
    port = int(os.getenv("PORT", DEFAULT_PORT))
    app = create_app()
    print(f"🚀 Server running on port {port}")
    print(f"   Templates: {app.template_folder}")
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
