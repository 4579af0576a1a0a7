from flask import jsonify
from sitebuilder.application.landing.public_snapshot import get_public_snapshot_by_domain
from . import v1_bp


@v1_bp.route("/public/landings/<domain>", methods=["GET"])
def public_landing(domain):
    snapshot = get_public_snapshot_by_domain(domain=domain.lower())
    return jsonify(snapshot), 200
