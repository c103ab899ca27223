"""Tests for revenuela.journey.performance — even-split tool rollup."""
from types import SimpleNamespace

import pytest

from revenuela.journey.performance import (
    OUTBOUND_PROVIDERS,
    PROSPECTING_PROVIDERS,
    aggregate_performance,
    effective_tools,
)


def _won(amount, currency='EUR'):
    return SimpleNamespace(amount=amount, currency=currency)


def _by_id(report):
    return {t.id: t for t in report.tools}


class TestEffectiveTools:

    def test_connected_subset_in_catalog_order(self):
        assert effective_tools(PROSPECTING_PROVIDERS, ['zoominfo', 'clay']) == (['clay', 'zoominfo'], True)

    def test_case_insensitive(self):
        assert effective_tools(OUTBOUND_PROVIDERS, ['HeyReach']) == (['heyreach'], True)

    def test_none_connected_falls_back_to_catalog(self):
        assert effective_tools(OUTBOUND_PROVIDERS, ['clay']) == (OUTBOUND_PROVIDERS, False)


class TestAggregatePerformance:

    def test_even_split_two_prospecting_three_outbound(self):
        report = aggregate_performance(
            100, [_won(1000)],
            ['clay', 'apollo', 'heyreach', 'lemlist', 'instantly'],
        )
        tools = _by_id(report)
        assert tools['clay'].leads_influenced == 15
        assert tools['apollo'].leads_influenced == 15
        assert tools['heyreach'].leads_influenced == 10
        assert tools['lemlist'].leads_influenced == 10
        assert tools['instantly'].leads_influenced == 10
        assert tools['clay'].mrr == '€250'
        assert tools['heyreach'].mrr == '€167'
        assert report.summary == {
            'prospectingCount': 2,
            'outboundCount': 3,
            'totalLeadsInfluenced': 60,
            'totalMrrFormatted': '€1.000',
        }

    def test_unconnected_category_shows_full_catalog(self):
        report = aggregate_performance(10, [], ['clay'])
        tools = _by_id(report)
        assert set(tools) == {'clay', 'heyreach', 'lemlist', 'instantly'}
        assert tools['clay'].connected is True
        assert tools['heyreach'].connected is False
        assert report.summary['outboundCount'] == 3

    def test_nothing_connected_shows_both_catalogs(self):
        report = aggregate_performance(0, [], [])
        assert len(report.tools) == 6
        assert not any(t.connected for t in report.tools)

    def test_unknown_providers_ignored(self):
        report = aggregate_performance(10, [], ['hubspot', 'stripe', 'clay'])
        assert 'hubspot' not in _by_id(report)

    def test_customers_split_across_all_effective_tools(self):
        report = aggregate_performance(10, [_won(100)] * 7, ['clay', 'heyreach'])
        assert all(t.customers_won == 3 for t in report.tools)

    def test_labels_roles_and_categories(self):
        tools = _by_id(aggregate_performance(10, [], ['zoominfo', 'instantly']))
        assert tools['zoominfo'].name == 'ZoomInfo'
        assert tools['zoominfo'].category == 'Prospecting'
        assert tools['zoominfo'].role == 'Enterprise lists'
        assert tools['instantly'].category == 'Outbound'

    def test_rounding_of_influenced_leads(self):
        # 7 * 0.6 = 4.2 -> 4, halved -> 2
        report = aggregate_performance(7, [], ['clay', 'heyreach'])
        assert report.summary['totalLeadsInfluenced'] == 4
        assert _by_id(report)['clay'].leads_influenced == 2

    def test_half_rounds_up(self):
        # 5 * 0.6 = 3, halved 1.5 -> 2
        report = aggregate_performance(5, [], ['clay', 'heyreach'])
        assert _by_id(report)['heyreach'].leads_influenced == 2

    @pytest.mark.parametrize('lead_count', [0, 1, 3, 999])
    def test_never_raises_on_small_inputs(self, lead_count):
        report = aggregate_performance(lead_count, [], [])
        assert report.summary['totalLeadsInfluenced'] >= 0


class TestTopWorkflows:

    def test_empty_without_revenue(self):
        assert aggregate_performance(10, [], ['clay']).top_workflows == []

    def test_zero_amount_deals_give_no_workflow(self):
        assert aggregate_performance(10, [_won(None), _won(0)], ['clay']).top_workflows == []

    def test_non_finite_amounts_left_out_of_revenue(self):
        report = aggregate_performance(10, [_won(float('nan')), _won(float('inf')), _won(500)], ['clay'])
        assert report.summary['totalMrrFormatted'] == '€500'
        assert report.top_workflows[0]['customers'] == 3

    def test_single_combined_entry(self):
        report = aggregate_performance(10, [_won(1200), _won(300)], ['clay'])
        assert report.top_workflows == [{
            'id': 'wf_combined_revenue',
            'label': 'Prospecting → Outbound → Closed Won',
            'mrr': '€1.500',
            'customers': 2,
            'summary': 'Aggregated revenue from all currently active tools.',
        }]

    def test_currency_from_first_won_deal(self):
        report = aggregate_performance(10, [_won(1000, 'USD'), _won(1000, 'EUR')], ['clay'])
        assert report.summary['totalMrrFormatted'] == 'USD 2.000'


class TestToDict:

    def test_camel_case_keys(self):
        data = aggregate_performance(10, [_won(100)], ['clay']).to_dict()
        assert set(data) == {'tools', 'summary', 'topWorkflows'}
        tool = data['tools'][0]
        assert tool['leadsInfluenced'] == 3
        assert 'customersWon' in tool
        assert tool['connected'] is True
