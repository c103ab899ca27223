"""
Per-tool performance rollup.

There is no event data linking a lead to a specific tool touch, so the numbers
here are an even split of workspace totals: half to prospecting tools, half to
outbound tools, then evenly across the tools in each category. When a category
has nothing connected, its whole catalog is shown (flagged connected=False) so
the page never renders empty.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from revenuela.config import DEFAULT_CURRENCY
from revenuela.journey.currency import finite_amount, format_currency, round_half_up

PROSPECTING_PROVIDERS = ['clay', 'apollo', 'zoominfo']
OUTBOUND_PROVIDERS = ['heyreach', 'lemlist', 'instantly']

PROVIDER_LABELS = {
    'clay': 'Clay',
    'apollo': 'Apollo',
    'zoominfo': 'ZoomInfo',
    'heyreach': 'HeyReach',
    'lemlist': 'Lemlist',
    'instantly': 'Instantly',
}

PROVIDER_ROLES = {
    'clay': 'Prospecting & enrichment',
    'apollo': 'Lead extraction',
    'zoominfo': 'Enterprise lists',
    'heyreach': 'LinkedIn sequences',
    'lemlist': 'Cold email',
    'instantly': 'Cold email engine',
}

INFLUENCE_RATIO = 0.6


@dataclass
class ToolPerformance:
    id: str
    name: str
    category: str                    # Prospecting | Outbound
    role: str
    leads_influenced: int
    customers_won: int
    mrr: str
    connected: bool = True
    reply_rate: Optional[str] = None
    meeting_rate: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'role': self.role,
            'leadsInfluenced': self.leads_influenced,
            'customersWon': self.customers_won,
            'mrr': self.mrr,
            'connected': self.connected,
            'replyRate': self.reply_rate,
            'meetingRate': self.meeting_rate,
        }


@dataclass
class PerformanceReport:
    tools: List[ToolPerformance] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)
    top_workflows: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tools': [t.to_dict() for t in self.tools],
            'summary': dict(self.summary),
            'topWorkflows': list(self.top_workflows),
        }


def effective_tools(catalog: List[str], connected: Iterable[str]):
    """
    Catalog entries that are connected, or the whole catalog when none are.

    Returns (providers, is_connected).
    """
    connected = {(p or '').lower() for p in connected}
    active = [p for p in catalog if p in connected]
    if active:
        return active, True
    return list(catalog), False


def _build_tools(providers, category, is_connected, leads_per_tool, mrr_per_tool,
                 customers_per_tool, currency) -> List[ToolPerformance]:
    return [
        ToolPerformance(
            id=provider,
            name=PROVIDER_LABELS.get(provider, provider),
            category=category,
            role=PROVIDER_ROLES.get(provider, category),
            leads_influenced=leads_per_tool,
            customers_won=customers_per_tool,
            mrr=format_currency(mrr_per_tool, currency),
            connected=is_connected,
        )
        for provider in providers
    ]


def aggregate_performance(lead_count: int, won_deals, connected_providers) -> PerformanceReport:
    won_deals = list(won_deals or [])
    connected_providers = list(connected_providers or [])

    total_won_mrr = sum((finite_amount(d.amount) or 0) for d in won_deals)
    total_customers = len(won_deals)
    currency = (won_deals[0].currency if won_deals else None) or DEFAULT_CURRENCY

    approx_leads_influenced = round_half_up(lead_count * INFLUENCE_RATIO)
    half_leads = round_half_up(approx_leads_influenced / 2)

    prospecting, prospecting_connected = effective_tools(PROSPECTING_PROVIDERS, connected_providers)
    outbound, outbound_connected = effective_tools(OUTBOUND_PROVIDERS, connected_providers)

    n_prospecting = max(1, len(prospecting))
    n_outbound = max(1, len(outbound))
    n_total = max(1, len(prospecting) + len(outbound))

    customers_per_tool = max(0, total_customers // n_total)

    tools = _build_tools(
        prospecting, 'Prospecting', prospecting_connected,
        leads_per_tool=max(0, half_leads // n_prospecting),
        mrr_per_tool=max(0, total_won_mrr / 2 / n_prospecting),
        customers_per_tool=customers_per_tool,
        currency=currency,
    )
    tools += _build_tools(
        outbound, 'Outbound', outbound_connected,
        leads_per_tool=max(0, half_leads // n_outbound),
        mrr_per_tool=max(0, total_won_mrr / 2 / n_outbound),
        customers_per_tool=customers_per_tool,
        currency=currency,
    )

    top_workflows = []
    if total_won_mrr > 0:
        top_workflows.append({
            'id': 'wf_combined_revenue',
            'label': 'Prospecting → Outbound → Closed Won',
            'mrr': format_currency(total_won_mrr, currency),
            'customers': total_customers,
            'summary': 'Aggregated revenue from all currently active tools.',
        })

    summary = {
        'prospectingCount': len(prospecting),
        'outboundCount': len(outbound),
        'totalLeadsInfluenced': approx_leads_influenced,
        'totalMrrFormatted': format_currency(total_won_mrr, currency),
    }

    return PerformanceReport(tools=tools, summary=summary, top_workflows=top_workflows)
