"""
Journey routes — per-lead tool journeys with outcome and attributed MRR.
"""
import logging
from flask import Blueprint, jsonify, request

from revenuela.config import JOURNEY_PAGE_SIZE
from revenuela.database import get_session
from revenuela.journey.assembler import assemble_journeys
from revenuela.services.crm_queries import recent_leads, related_deals_by_lead

logger = logging.getLogger('routes.journeys')

bp = Blueprint('journeys', __name__)


@bp.route('/api/journeys')
def list_journeys():
    """Journeys for the newest leads of a workspace."""
    workspace_id = request.args.get('workspaceId', '')
    if not workspace_id:
        return jsonify({'error': 'workspaceId is required'}), 400

    session = get_session()
    try:
        leads = recent_leads(session, workspace_id, JOURNEY_PAGE_SIZE)
        if not leads:
            return jsonify({'journeys': []})

        deals_by_lead = related_deals_by_lead(session, workspace_id, leads)
        journeys = assemble_journeys(leads, deals_by_lead)
        return jsonify({'journeys': [j.to_dict() for j in journeys if j.steps]})
    except Exception:
        logger.error("Error loading journeys for workspace %s", workspace_id, exc_info=True)
        return jsonify({'error': 'Failed to load journeys'}), 500
    finally:
        session.close()
