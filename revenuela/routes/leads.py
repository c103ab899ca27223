"""
Lead routes — list, manual create, CSV upload, journey editing, integrations.
"""
import logging
from flask import Blueprint, jsonify, request
from sqlalchemy.exc import IntegrityError

from revenuela.config import LEADS_PAGE_SIZE
from revenuela.database import get_session
from revenuela.models.lead import Lead
from revenuela.services.crm_queries import integrations
from revenuela.services.leads import (
    LeadNotFoundError,
    create_lead,
    import_rows,
    read_csv,
    serialize_lead,
    set_journey_steps,
)

logger = logging.getLogger('routes.leads')

bp = Blueprint('leads', __name__)


def _payload():
    return request.get_json(silent=True) or request.form.to_dict() or {}


@bp.route('/api/leads')
def list_leads():
    workspace_id = request.args.get('workspaceId', '')
    if not workspace_id:
        return jsonify({'error': 'workspaceId is required'}), 400

    session = get_session()
    try:
        leads = (
            session.query(Lead)
            .filter(Lead.workspace_id == workspace_id)
            .order_by(Lead.created_at.desc(), Lead.id)
            .limit(LEADS_PAGE_SIZE)
            .all()
        )
        return jsonify({'leads': [serialize_lead(lead) for lead in leads]})
    except Exception:
        logger.error("Error loading leads for workspace %s", workspace_id, exc_info=True)
        return jsonify({'error': 'Failed to load leads'}), 500
    finally:
        session.close()


@bp.route('/api/leads', methods=['POST'])
def create_lead_route():
    """Create a manual lead with a fresh RVN id."""
    data = _payload()
    workspace_id = data.get('workspaceId')
    email = data.get('email')
    if not workspace_id or not email:
        return jsonify({'error': 'Workspace ID and Email are required'}), 400

    session = get_session()
    try:
        lead = create_lead(
            session,
            workspace_id,
            email,
            first_name=data.get('firstName') or '',
            last_name=data.get('lastName') or '',
            company=data.get('company') or '',
            title=data.get('title') or '',
        )
        return jsonify({'success': True, 'lead': serialize_lead(lead)}), 201
    except IntegrityError:
        session.rollback()
        return jsonify({'error': 'A lead with this email already exists'}), 409
    except Exception:
        session.rollback()
        logger.error("Create lead error", exc_info=True)
        return jsonify({'error': 'Failed to create lead'}), 500
    finally:
        session.close()


@bp.route('/api/leads/upload-csv', methods=['POST'])
def upload_csv():
    upload = request.files.get('file')
    if upload is None:
        return jsonify({'error': 'No file uploaded'}), 400
    workspace_id = request.form.get('workspaceId')
    if not workspace_id:
        return jsonify({'error': 'workspaceId is required'}), 400

    session = get_session()
    try:
        count = import_rows(session, workspace_id, read_csv(upload.read()))
        return jsonify({'success': True, 'count': count})
    except Exception:
        session.rollback()
        logger.error("CSV import failed for workspace %s", workspace_id, exc_info=True)
        return jsonify({'error': 'Failed to import CSV'}), 500
    finally:
        session.close()


@bp.route('/api/leads/<lead_id>/journey', methods=['PATCH'])
def update_journey(lead_id):
    """Save curated journey steps for a lead."""
    steps = (request.get_json(silent=True) or {}).get('steps')
    if not isinstance(steps, list):
        return jsonify({'error': 'Steps must be an array'}), 400

    session = get_session()
    try:
        lead = set_journey_steps(session, lead_id, steps)
        return jsonify({'success': True, 'leadId': lead.id})
    except LeadNotFoundError:
        return jsonify({'error': 'Lead not found'}), 404
    except Exception:
        session.rollback()
        logger.error("Failed to save journey for lead %s", lead_id, exc_info=True)
        return jsonify({'error': 'Failed to save journey'}), 500
    finally:
        session.close()


@bp.route('/api/integrations')
def list_integrations():
    workspace_id = request.args.get('workspaceId', '')
    if not workspace_id:
        return jsonify({'error': 'workspaceId is required'}), 400

    session = get_session()
    try:
        rows = integrations(session, workspace_id)
        return jsonify({'integrations': [
            {
                'provider': row.provider,
                'status': row.status,
                'updatedAt': row.updated_at.isoformat() if row.updated_at else None,
            }
            for row in rows
        ]})
    except Exception:
        logger.error("Error loading integrations for workspace %s", workspace_id, exc_info=True)
        return jsonify({'error': 'Failed to load integrations'}), 500
    finally:
        session.close()
