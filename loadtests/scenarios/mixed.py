"""Mixed buyer and seller workload scenario.

Buyers keep placing multi-seller orders while sellers work through the
items those orders create. This is the recommended scenario for a load
baseline.
"""

from locust import HttpUser, between

from loadtests.scenarios.ordering import BuyerCheckoutJourney, SellerFulfilmentJourney


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload for the marketplace.

    Weight distribution:

    - Buyer checkout (60%): stock reservation across sellers plus reads
    - Seller fulfilment (40%): item status updates, which derive sub-order
      and order status and notify the buyer and other sellers

    Sellers of the same multi-seller order contend for its per-order lock,
    and buyers contend for the same seeded listings.
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        BuyerCheckoutJourney: 6,
        SellerFulfilmentJourney: 4,
    }
