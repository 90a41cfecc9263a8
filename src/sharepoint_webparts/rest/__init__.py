"""Resource-path composition and request dispatch for the SharePoint REST API."""
