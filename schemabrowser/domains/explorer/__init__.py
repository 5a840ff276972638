"""Object browser domain: listing, paging and filtering schema objects."""
