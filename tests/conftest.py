import io
import threading

import pytest
import requests

ARTICLES_XML = """<?xml version="1.0" encoding="utf-8"?>
<artiklar xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <skapad-tid>2015-03-01 03:00</skapad-tid>
  <info>
    <meddelande>Datum format: yyyy-mm-dd</meddelande>
  </info>
  <artikel>
    <nr>7516</nr>
    <Artikelid>1</Artikelid>
    <Varnummer>0075</Varnummer>
    <Namn>Absolut Vodka</Namn>
    <Prisinklmoms>229,00</Prisinklmoms>
    <Volymiml>700.00</Volymiml>
    <PrisPerLiter>327.14</PrisPerLiter>
    <Saljstart>1993-10-01</Saljstart>
    <Slutlev/>
    <Varugrupp>Okryddad sprit</Varugrupp>
    <Forpackning>Flaska</Forpackning>
    <Forslutning/>
    <Ursprunglandnamn>Sverige</Ursprunglandnamn>
    <Producent>Pernod Ricard</Producent>
    <Leverantor>Pernod Ricard Sweden AB</Leverantor>
    <Alkoholhalt>40.00%</Alkoholhalt>
    <Sortiment>FS</Sortiment>
    <Ekologisk>0</Ekologisk>
    <Koscher>0</Koscher>
    <RavarorBeskrivning>Vete</RavarorBeskrivning>
  </artikel>
  <artikel>
    <nr>7524</nr>
    <Artikelid>2</Artikelid>
    <Varnummer>0076</Varnummer>
    <Namn>Chateau de Sancerre</Namn>
    <Namn2>Blanc</Namn2>
    <Prisinklmoms>189,00</Prisinklmoms>
    <Argang>2012</Argang>
    <Provadargang>2011</Provadargang>
    <Ursprung>Loire</Ursprung>
    <Ursprunglandnamn>Frankrike</Ursprunglandnamn>
    <Alkoholhalt>12.50%</Alkoholhalt>
  </artikel>
</artiklar>
"""

STORES_XML = """<?xml version="1.0" encoding="utf-8"?>
<ButikerOmbud xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <Info>
    <Meddelande>Oppettider visas for de kommande dagarna</Meddelande>
  </Info>
  <ButikOmbud>
    <Typ>Butik</Typ>
    <Nr>0102</Nr>
    <Address1>Klarabergsgatan 62</Address1>
    <Address3>111 21</Address3>
    <Address4>Stockholm</Address4>
    <Address5>Stockholms lan</Address5>
    <Telefon>08/796 98 10</Telefon>
    <ButiksTyp>Vanlig</ButiksTyp>
    <Tjanster>Varuutlamning</Tjanster>
    <SokOrd>T-centralen;City</SokOrd>
    <Oppettider>2015-03-02;10:00;19:00;;;0</Oppettider>
    <RT90x>6581121</RT90x>
    <RT90y>1627844</RT90y>
  </ButikOmbud>
  <ButikOmbud>
    <Typ>Ombud</Typ>
    <Nr>5021</Nr>
    <Address1>ICA Nara Ljusnan</Address1>
    <Address4>Ljusdal</Address4>
    <Telefon>0651-100 00</Telefon>
  </ButikOmbud>
</ButikerOmbud>
"""


class TrackingBody(io.BytesIO):
    """In-memory response body that records connection release."""

    def __init__(self, data=b""):
        super().__init__(data)
        self.released = False

    def release_conn(self):
        self.released = True


class FailingBody(TrackingBody):
    def read(self, *args, **kwargs):
        raise requests.exceptions.ChunkedEncodingError("connection broken")


def make_response(status_code=200, body=b"", url="http://www.systembolaget.se/", raw=None):
    if isinstance(body, str):
        body = body.encode("utf-8")
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.raw = raw if raw is not None else TrackingBody(body)
    return response


class FakeSession:
    """Stands in for requests.Session; answers by URL suffix."""

    def __init__(self, routes=None, error=None):
        self.routes = routes or {}
        self.error = error
        self.calls = []
        self.responses = []
        self.closed = False
        self._lock = threading.Lock()

    def get(self, url, **kwargs):
        with self._lock:
            self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        for suffix, (status_code, body) in self.routes.items():
            if url.endswith(suffix):
                response = make_response(status_code, body, url=url)
                break
        else:
            response = make_response(404, b"", url=url)
        with self._lock:
            self.responses.append(response)
        return response

    def close(self):
        self.closed = True


@pytest.fixture
def fake_session():
    return FakeSession(
        routes={
            "Assortment.aspx?Format=Xml": (200, ARTICLES_XML),
            "Assortment.aspx?butikerombud=1": (200, STORES_XML),
        }
    )
