from utils.date_helpers import (
    derive_dates,
    parse_api_date,
    to_form_date,
    today_iso,
)


class PendingRecord:
    """A land-survey job that has not been completed yet.

    Attribute names follow the backend's JSON keys. Date attributes hold
    date objects (or None); text attributes hold the raw strings.
    """

    DATE_ATTRS = (
        "orderDate",
        "fwDoneOn",
        "proposedReportDate",
        "deliveryDate",
        "proposedDate",
        "fieldWorkDone",
        "paidOn",
    )
    TEXT_ATTRS = (
        "clientName",
        "clientContactNo",
        "coName",
        "coPhone",
        "plotNo",
        "streetNo",
        "sector",
        "scheme",
        "plotSize",
        "reportDelivery",
    )

    def __init__(self, id=None, srNo=None, fee=None, **fields):
        self.id = id
        self.srNo = srNo
        self.fee = fee
        for name in self.TEXT_ATTRS:
            setattr(self, name, fields.get(name))
        for name in self.DATE_ATTRS:
            setattr(self, name, parse_api_date(fields.get(name)))

    @classmethod
    def from_api(cls, data):
        """Build a record from a backend JSON object."""
        fields = {name: data.get(name) for name in cls.TEXT_ATTRS + cls.DATE_ATTRS}
        # Created records carry the phone as coPhoneNumber
        fields["coPhone"] = data.get("coPhoneNumber", data.get("coPhone"))
        return cls(
            id=data.get("_id", data.get("id")),
            srNo=data.get("srNo"),
            fee=data.get("fee"),
            **fields,
        )

    def get_description(self):
        """One-line plot description for the pending works table"""
        return (
            f"Plot No: {self.plotNo}, Street No: {self.streetNo}, "
            f"Sector/Block: {self.sector}, Scheme: {self.scheme}"
        )

    def edit_form_data(self):
        """Initial values for the edit form; missing dates default to today."""
        today = today_iso()
        fw_done_on = to_form_date(self.fwDoneOn, today)
        return {
            "clientName": self.clientName or "",
            "clientContactNo": self.clientContactNo or "",
            "coName": self.coName or "",
            "coPhone": self.coPhone or "",
            "plotNo": self.plotNo or "",
            "plotSize": self.plotSize or "",
            "streetNo": self.streetNo or "",
            "sector": self.sector or "",
            "scheme": self.scheme or "",
            "fee": "" if self.fee is None else str(self.fee),
            "paidOn": to_form_date(self.paidOn, today),
            "proposedDate": to_form_date(self.proposedDate, today),
            "fwDoneOn": fw_done_on,
            "proposedReportDate": to_form_date(self.proposedReportDate, today),
            # Older records have no delivery date stored
            "deliveryDate": to_form_date(self.deliveryDate)
            or derive_dates(fw_done_on)["deliveryDate"],
        }

    def __repr__(self):
        return f"<PendingRecord {self.id} {self.clientName}>"


class ScheduleEntry:
    """A row of the backend's pre-computed weekly schedule."""

    def __init__(self, srNo=None, clientName=None, plotNo=None, streetNo=None,
                 sector=None, scheme=None, proposedDate=None):
        self.srNo = srNo
        self.clientName = clientName
        self.plotNo = plotNo
        self.streetNo = streetNo
        self.sector = sector
        self.scheme = scheme
        self.proposedDate = parse_api_date(proposedDate)

    @classmethod
    def from_api(cls, data):
        return cls(
            srNo=data.get("srNo"),
            clientName=data.get("clientName"),
            plotNo=data.get("plotNo"),
            streetNo=data.get("streetNo"),
            sector=data.get("sector"),
            scheme=data.get("scheme"),
            proposedDate=data.get("proposedDate"),
        )

    def get_project(self):
        """Plot, street, sector and scheme joined, with N/A for blanks"""
        parts = [self.plotNo, self.streetNo, self.sector, self.scheme]
        return ", ".join(str(p) if p not in (None, "") else "N/A" for p in parts)

    def __repr__(self):
        return f"<ScheduleEntry {self.srNo} {self.clientName}>"
