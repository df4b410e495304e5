"""Master playlist, variant playlist and segment routes."""
from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Blueprint, Response, abort, request
from werkzeug.wsgi import wrap_file

from ..services.playlist_generator import MPEGURL_CONTENT_TYPE, render_master_playlist
from ..services.segment_store import SEGMENT_CONTENT_TYPE, SegmentNotFound
from ..state import get_server

if TYPE_CHECKING:  # pragma: no cover
    from ..services.hls_server import HlsServerOptions

SKIP_QUERY_PARAM = "_HLS_skip"
SKIP_QUERY_VALUE = "YES"


def _playlist_response(body: str) -> Response:
    response = Response(body, mimetype=MPEGURL_CONTENT_TYPE)
    response.headers["Cache-Control"] = "no-cache"
    return response


def wants_delta_update(args) -> bool:
    return SKIP_QUERY_VALUE in args.getlist(SKIP_QUERY_PARAM)


def create_stream_blueprint(options: "HlsServerOptions") -> Blueprint:
    """Build the HLS routes rooted at ``/{options.path}``."""
    stream_bp = Blueprint("stream", __name__, url_prefix=f"/{options.path}")
    master_playlist = render_master_playlist(options.variant_filename)

    @stream_bp.route(f"/{options.playlist_filename}")
    def serve_master_playlist():
        return _playlist_response(master_playlist)

    @stream_bp.route(f"/{options.variant_filename}")
    def serve_variant_playlist():
        server = get_server()
        if server is None:
            return Response("Internal Server Error", status=500, mimetype="text/plain")

        rendered = server.cache.snapshot()
        if wants_delta_update(request.args):
            return _playlist_response(rendered.delta)
        return _playlist_response(rendered.full)

    @stream_bp.route(f"/{options.segments_path}/<segment_name>")
    def serve_segment(segment_name: str):
        server = get_server()
        if server is None:
            abort(404)

        try:
            payload = server.segment_store.open_name(segment_name)
        except SegmentNotFound:
            abort(404)

        response = Response(
            wrap_file(request.environ, payload.stream),
            mimetype=SEGMENT_CONTENT_TYPE,
            direct_passthrough=True,
        )
        if payload.length is not None:
            response.content_length = payload.length
        return response

    return stream_bp
