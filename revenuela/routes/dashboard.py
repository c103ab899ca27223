"""
Dashboard routes — health check, funnel stage counts, imports, recent leads.
"""
import logging
import re
from flask import Blueprint, jsonify, request

from revenuela.config import RECENT_JOURNEYS_LIMIT, SERVICE_NAME
from revenuela.database import get_session
from revenuela.journey.classifier import DASHBOARD_BUCKETER, STAGE_IDS, STAGE_LABELS
from revenuela.services.crm_queries import imports_by_source, lead_statuses, recent_leads

logger = logging.getLogger('routes.dashboard')

bp = Blueprint('dashboard', __name__)


def _source_slug(source: str) -> str:
    return re.sub(r'\s+', '_', source.lower())


@bp.route('/health')
def health_check():
    """Health check endpoint."""
    return jsonify({'status': 'ok', 'service': SERVICE_NAME}), 200


@bp.route('/api/dashboard')
def get_dashboard():
    workspace_id = request.args.get('workspaceId', '')
    if not workspace_id:
        return jsonify({'error': 'workspaceId is required'}), 400

    session = get_session()
    try:
        counts = DASHBOARD_BUCKETER.counts(lead_statuses(session, workspace_id))
        stages = [
            {'id': stage, 'label': STAGE_LABELS[stage], 'count': counts.get(stage, 0)}
            for stage in STAGE_IDS
        ]

        prospecting_imports = [
            {'id': _source_slug(row.source), 'source': row.source, 'imports': row.imports}
            for row in imports_by_source(session, workspace_id)
        ]

        recent_journeys = []
        for lead in recent_leads(session, workspace_id, RECENT_JOURNEYS_LIMIT):
            if lead.contact:
                contact_name = f"{lead.contact.first_name or ''} {lead.contact.last_name or ''}"
            else:
                contact_name = lead.full_name or 'Unknown'
            recent_journeys.append({
                'id': lead.id,
                'status': lead.status,
                'contactName': contact_name,
                'createdAt': lead.created_at.isoformat() if lead.created_at else None,
            })

        return jsonify({
            'stages': stages,
            'prospectingImports': prospecting_imports,
            'recentJourneys': recent_journeys,
        })
    except Exception:
        logger.error("Error loading dashboard for workspace %s", workspace_id, exc_info=True)
        return jsonify({'error': 'Failed to load dashboard'}), 500
    finally:
        session.close()
