"""
Products app.

Products belong to a brand in the catalog. They are never shown in
brand responses and outlive the deletion of their brand.
"""
