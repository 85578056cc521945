"""Access-control core: request context, role tiers, tenant gate, order workflow."""
