"""Tests for revenuela.services.leads — id minting, CSV mapping, journey edits."""
import re
from unittest.mock import patch

import pytest

from revenuela.services.leads import (
    LeadIdExhaustedError,
    LeadNotFoundError,
    import_rows,
    mint_lead_id,
    new_lead_id,
    normalize_csv_row,
    read_csv,
    set_journey_steps,
)


class TestMintLeadId:

    def test_format(self):
        assert re.fullmatch(r'RVN-[0-9A-F]{8}', mint_lead_id())

    def test_unique_across_calls(self):
        assert len({mint_lead_id() for _ in range(200)}) == 200


class TestNewLeadId:

    def test_skips_an_id_already_taken(self, db_session, make_lead):
        taken = make_lead()
        minted = [taken.id, 'RVN-0000BEEF']
        with patch('revenuela.services.leads.mint_lead_id', side_effect=minted):
            assert new_lead_id(db_session) == 'RVN-0000BEEF'

    def test_gives_up_after_repeated_clashes(self, db_session, make_lead):
        taken = make_lead()
        with patch('revenuela.services.leads.mint_lead_id', return_value=taken.id):
            with pytest.raises(LeadIdExhaustedError):
                new_lead_id(db_session)


class TestNormalizeCsvRow:

    def test_first_non_empty_spelling_wins(self):
        row = {'Email': '', 'email': 'a@b.com', 'Company': 'Acme', 'Account': 'Ignored'}
        fields = normalize_csv_row(row)
        assert fields['email'] == 'a@b.com'
        assert fields['company'] == 'Acme'

    def test_missing_email_rejected(self):
        assert normalize_csv_row({'First Name': 'Ada'}) is None

    def test_values_stripped(self):
        assert normalize_csv_row({'email': '  a@b.com '})['email'] == 'a@b.com'

    def test_none_values_from_short_rows(self):
        fields = normalize_csv_row({'email': 'a@b.com', 'title': None})
        assert fields['title'] == ''


class TestReadCsv:

    def test_handles_utf8_bom(self):
        rows = read_csv('\ufeffEmail,Company\na@b.com,Acme\n'.encode('utf-8'))
        assert rows == [{'Email': 'a@b.com', 'Company': 'Acme'}]


class TestImportRows:

    def test_custom_source(self, db_session):
        from revenuela.models.lead import Lead
        count = import_rows(db_session, 'ws-1', [{'email': 'a@b.com'}], source='Google Sheets')
        assert count == 1
        assert db_session.query(Lead).one().source == 'Google Sheets'

    def test_same_email_in_two_workspaces(self, db_session):
        assert import_rows(db_session, 'ws-1', [{'email': 'a@b.com'}]) == 1
        assert import_rows(db_session, 'ws-2', [{'email': 'a@b.com'}]) == 1


class TestSetJourneySteps:

    def test_unknown_lead_raises(self, db_session):
        with pytest.raises(LeadNotFoundError):
            set_journey_steps(db_session, 'RVN-00000000', ['Clay'])

    def test_steps_stored_as_strings(self, db_session, make_lead):
        lead = make_lead()
        set_journey_steps(db_session, lead.id, ['Clay', 2])
        assert lead.journey_steps == '["Clay", "2"]'
