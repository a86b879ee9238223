from services.pending_records_service import PendingRecordsExtension

# Initialize extensions
pending_records = PendingRecordsExtension()
