"""
Performance routes — per-tool rollup of influenced leads, customers and MRR.
"""
import logging
from flask import Blueprint, jsonify, request

from revenuela.database import get_session
from revenuela.journey.performance import aggregate_performance
from revenuela.services.crm_queries import connected_providers, count_leads, won_deals

logger = logging.getLogger('routes.performance')

bp = Blueprint('performance', __name__)


@bp.route('/api/performance')
def get_performance():
    workspace_id = request.args.get('workspaceId', '')
    if not workspace_id:
        return jsonify({'error': 'workspaceId is required'}), 400

    session = get_session()
    try:
        report = aggregate_performance(
            count_leads(session, workspace_id),
            won_deals(session, workspace_id),
            connected_providers(session, workspace_id),
        )
        return jsonify(report.to_dict())
    except Exception:
        logger.error("Error loading performance for workspace %s", workspace_id, exc_info=True)
        return jsonify({'error': 'Failed to load performance'}), 500
    finally:
        session.close()
