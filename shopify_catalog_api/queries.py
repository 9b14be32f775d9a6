"""GraphQL documents used against the Shopify Admin API."""

# Products with up to 100 metafields each, and up to 100 variants each with
# up to 100 metafields. Paged by $cursor / $limit.
PRODUCTS_QUERY = """
query GetProducts($cursor: String, $limit: Int!) {
  products(first: $limit, after: $cursor) {
    pageInfo {
      hasNextPage
      endCursor
    }
    edges {
      node {
        id
        title
        handle
        status
        productType
        vendor
        tags
        metafields(first: 100) {
          edges {
            node {
              namespace
              key
              value
              type
            }
          }
        }
        variants(first: 100) {
          edges {
            node {
              id
              title
              sku
              price
              inventoryQuantity
              metafields(first: 100) {
                edges {
                  node {
                    namespace
                    key
                    value
                    type
                  }
                }
              }
            }
          }
        }
      }
    }
  }
}
"""

# Small unpaged query for checking credentials and response shape.
PRODUCTS_TEST_QUERY = """
query GetProductsTest {
  products(first: 5) {
    pageInfo {
      hasNextPage
      endCursor
    }
    edges {
      node {
        id
        title
        handle
        metafields(first: 10) {
          edges {
            node {
              namespace
              key
              value
              type
            }
          }
        }
        variants(first: 5) {
          edges {
            node {
              id
              title
              sku
              metafields(first: 10) {
                edges {
                  node {
                    namespace
                    key
                    value
                    type
                  }
                }
              }
            }
          }
        }
      }
    }
  }
}
"""
