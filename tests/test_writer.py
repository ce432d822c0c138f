import sys
import os
import io
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import AccountSnapshot
from writer import format_amount, write_accounts


class TestFormatAmount:
    def test_pads_to_4_places(self):
        assert format_amount(Decimal("1.5")) == "1.5000"
        assert format_amount(Decimal("0")) == "0.0000"
        assert format_amount(Decimal("100.0001")) == "100.0001"

    def test_no_exponent_notation(self):
        assert format_amount(Decimal("1E+3")) == "1000.0000"


class TestWriteAccounts:
    def test_writes_header_and_rows(self):
        snapshots = [
            AccountSnapshot(client_id=1, available=Decimal("1.5"), held=Decimal("0"), total=Decimal("1.5"), locked=False),
            AccountSnapshot(client_id=2, available=Decimal("0"), held=Decimal("0"), total=Decimal("0"), locked=True),
        ]
        stream = io.StringIO()

        write_accounts(snapshots, stream)

        assert stream.getvalue().splitlines() == [
            "client,available,held,total,locked",
            "1,1.5000,0.0000,1.5000,false",
            "2,0.0000,0.0000,0.0000,true",
        ]

    def test_no_accounts(self):
        stream = io.StringIO()

        write_accounts([], stream)

        assert stream.getvalue() == "client,available,held,total,locked\n"
