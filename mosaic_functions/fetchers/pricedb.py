"""
Price Database Fetcher - Artist and artwork market records via GraphQL.

Looks up the artist of a customer submission, finds the submitted work in the
artist's catalogue and returns its latest sale.
"""

import re
from typing import Dict, Any, Optional

from ..config.settings import PRICEDB_GRAPHQL_URL
from ..core.http import FunctionsError, HttpRequester, make_http_request


ARTIST_DETAILS_QUERY = """
query artistDetails($artistId: String, $permalink: String, $artistName: String, $yob: Int) {
  artist(artistId: $artistId, permalink: $permalink, artistName: $artistName, yob: $yob) {
    artistId
    permalink
    artistName
    bio
    fallbackBio
    yob
    yod
    recordPrice
    historicalAppreciation
    worksCount
    coverImageLink
    performance {
      year
      totalTurnover
      maxPrice
      lotsUnsold
      lotsSold
      averagePrice
      __typename
    }
    works {
      permalink
      workTitle
      imageLink
      moic
      sales {
        priceUSD
        date
        __typename
      }
      __typename
    }
    __typename
  }
}
"""

ARTWORK_QUERY = """
query ArtworkForAdmin($permalink: String) {
  artwork: work(permalink: $permalink) {
    permalink
    artistPermalink
    workTitle
    imageLink
    irr
    totalReturn
    notes
    medium
    heightCM
    widthCM
    spreadsheetId
    internalNotes
    sales {
      date
      permalink
      priceUSD
      lowEstimateUSD
      highEstimateUSD
      internalNotes
      lotNumber
      notes
      currency
      workTitle
      __typename
    }
    moic
    firstSaleDate
    lastSaleDate
    firstSalePrice
    lastSalePrice
    __typename
  }
}
"""

_SURROUNDING_QUOTES = re.compile(r'^"|"$')


def format_artist_name(artist_name: str) -> str:
    """Turn an artist name into the database artist id ("Yayoi Kusama" -> "yayoi-kusama")."""
    return "-".join(artist_name.split(" ")).lower()


def strip_title_quotes(title: str) -> str:
    """Remove one leading and one trailing double quote from a work title."""
    return _SURROUNDING_QUOTES.sub("", title)


def query_pricedb(
    operation_name: str,
    query: str,
    variables: Dict[str, Any],
    http: HttpRequester = make_http_request,
) -> Optional[Dict[str, Any]]:
    """
    Execute a named GraphQL operation.

    Returns:
        The `data` object of the GraphQL response, or None on failure
    """
    response = http(
        url=PRICEDB_GRAPHQL_URL,
        method="POST",
        headers={"Content-Type": "application/json"},
        data={
            "operationName": operation_name,
            "variables": variables,
            "query": query,
        },
    )

    if response.get("error"):
        print(f"Query error: {response.get('message')}")
        return None

    body = response.get("data")
    if not isinstance(body, dict) or body.get("errors"):
        print(f"Query error: {body.get('errors') if isinstance(body, dict) else body}")
        return None

    return body.get("data")


def fetch_artist_data(artist_id: str, http: HttpRequester = make_http_request) -> Dict[str, Any]:
    """
    Fetch an artist record with its catalogue of works.

    Raises:
        FunctionsError: If the query fails or no artist is returned
    """
    data = query_pricedb("artistDetails", ARTIST_DETAILS_QUERY, {"artistId": artist_id}, http)
    if not data or not data.get("artist"):
        raise FunctionsError("Error fetching artist data")
    return data["artist"]


def fetch_work_details(permalink: str, http: HttpRequester = make_http_request) -> Dict[str, Any]:
    """
    Fetch an artwork record by permalink (e.g. "w:038e7b184c25ad9").

    Raises:
        FunctionsError: If the query fails or no artwork is returned
    """
    data = query_pricedb("ArtworkForAdmin", ARTWORK_QUERY, {"permalink": permalink}, http)
    if not data or not data.get("artwork"):
        raise FunctionsError("Error fetching work details")
    return data["artwork"]


def find_artist_work(artist: Dict[str, Any], title: str) -> Optional[Dict[str, Any]]:
    """Return the first catalogue work whose unquoted title equals `title`."""
    for work in artist.get("works") or []:
        if strip_title_quotes(work.get("workTitle") or "") == title:
            return work
    return None


def fetch_work_market_data(work: Dict[str, Any], http: HttpRequester = make_http_request) -> Dict[str, Any]:
    """
    Build the market record for a customer submission.

    Args:
        work: Customer submission with `artist` and `title`

    Returns:
        Dict with title, artist, lastSaleDate, lastSalePrice

    Raises:
        FunctionsError: On any lookup failure, including no matching work
    """
    try:
        artist = fetch_artist_data(format_artist_name(work["artist"]), http)

        external_work = find_artist_work(artist, work["title"])
        if external_work is None:
            raise LookupError(f"No work titled {work['title']!r} for artist {artist.get('artistName')}")

        market_data = fetch_work_details(external_work["permalink"], http)

        return {
            "title": strip_title_quotes(market_data["workTitle"]),
            "artist": artist["artistName"],
            "lastSaleDate": market_data.get("lastSaleDate"),
            "lastSalePrice": market_data.get("lastSalePrice"),
        }
    except Exception as e:
        print(e)
        raise FunctionsError("Error fetching work market data") from e
