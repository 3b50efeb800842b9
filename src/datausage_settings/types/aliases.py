"""Type aliases using modern PEP 695 syntax.

This module defines the union types shared by the evaluation functions
and the platform collaborator protocols.
"""

from datausage_settings.types.models import Ethernet, MobileAll, WifiWildcard

# Subscription identifier assigned by the subscription service
# INVALID_SUBSCRIPTION_ID marks the absence of a usable subscription
type SubscriptionId = int

# Traffic-accounting category used to scope usage and policy queries
# Match on the concrete variant classes to inspect the payload
type NetworkTemplate = MobileAll | WifiWildcard | Ethernet
