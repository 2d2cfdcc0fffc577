# ledger/api/filters.py

import django_filters

from ledger.models import LedgerEntry


class LedgerEntryFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name="iso_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="iso_date", lookup_expr="lte")
    document_no = django_filters.CharFilter(lookup_expr="icontains")
    counterparty = django_filters.CharFilter(lookup_expr="icontains")
    description = django_filters.CharFilter(lookup_expr="icontains")
    tag = django_filters.CharFilter(field_name="tags__name", lookup_expr="iexact")

    class Meta:
        model = LedgerEntry
        fields = [
            "type",
            "source",
            "method",
            "direction",
            "category",
            "bank_account",
            "card",
            "contact",
            "cheque",
            "pos_terminal",
        ]
