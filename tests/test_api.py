# DEPENDENCIES
ENTRY_LEASE = ("The premises are located at 100 Market Street, San Francisco, CA.\n\n"
               "Landlord may enter the premises at any time without notice.")


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["jurisdictions"] == 7

    def test_jurisdictions(self, client):
        data = client.get("/api/v1/jurisdictions").json()

        assert "Austin, Texas" in data["supported"]
        assert data["auto_detect"] == "auto"
        assert "Texas" in data["rule_documents"]


class TestAnalyzeText:
    def test_detected_jurisdiction(self, client):
        response = client.post("/api/v1/lease/analyze/text", data = {"lease_text" : ENTRY_LEASE})
        data     = response.json()

        assert response.status_code == 200
        assert data["jurisdiction"] == "San Francisco, California"
        assert "entry-notice" in [flag["type"] for flag in data["flags"]]
        assert data["extracted_text"] == ENTRY_LEASE
        assert data["analysis_id"]

    def test_explicit_jurisdiction(self, client):
        response = client.post("/api/v1/lease/analyze/text", data = {"lease_text" : ENTRY_LEASE, "jurisdiction" : "Boston, Massachusetts"})

        assert response.json()["jurisdiction"] == "Boston, Massachusetts"

    def test_empty_text_rejected(self, client):
        response = client.post("/api/v1/lease/analyze/text", data = {"lease_text" : "   "})

        assert response.status_code == 400
        assert set(response.json()) == {"error", "detail", "timestamp"}


class TestAnalyzeFile:
    def test_txt_upload(self, client):
        response = client.post("/api/v1/lease/analyze/file",
                               files = {"file" : ("lease.txt", ENTRY_LEASE.encode("utf-8"), "text/plain")},
                               data  = {"jurisdiction" : "auto"},
                              )

        assert response.status_code == 200
        assert response.json()["jurisdiction"] == "San Francisco, California"

    def test_bad_extension(self, client):
        response = client.post("/api/v1/lease/analyze/file", files = {"file" : ("lease.exe", b"data", "application/octet-stream")})

        assert response.status_code == 400

    def test_empty_file(self, client):
        response = client.post("/api/v1/lease/analyze/file", files = {"file" : ("lease.txt", b"", "text/plain")})

        assert response.status_code == 400


class TestReferencesAndReport:
    def test_references(self, client):
        data = client.get("/api/v1/lease/references", params = {"query" : "security deposit", "jurisdiction" : "California"}).json()

        assert data["success"] is True
        assert data["sections"][0]["id"] == "security-deposit"

    def test_references_need_query(self, client):
        assert client.get("/api/v1/lease/references").status_code == 422

    def test_pdf_report(self, client):
        analysis = client.post("/api/v1/lease/analyze/text", data = {"lease_text" : ENTRY_LEASE}).json()
        response = client.post("/api/v1/lease/report", json = analysis)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")


class TestAnalysisMetadata:
    LEASE_TEXT = ("This lease is between Landlord and Tenant.\n\n"
                  "Landlord may enter the premises at any time without notice.")

    def test_lease_indicators_reported(self, client):
        metadata = client.post("/api/v1/lease/analyze/text", data = {"lease_text" : self.LEASE_TEXT}).json()["metadata"]

        assert metadata["lease_score"] == 11
        assert metadata["likely_lease"] is True
        assert {"lease", "landlord", "tenant", "premises"} <= set(metadata["found_indicators"])

    def test_text_statistics_reported(self, client):
        metadata = client.post("/api/v1/lease/analyze/text", data = {"lease_text" : self.LEASE_TEXT}).json()["metadata"]

        assert metadata["character_count"] == len(self.LEASE_TEXT)
        assert metadata["word_count"] == len(self.LEASE_TEXT.split())
        assert metadata["paragraph_count"] == 2
        assert metadata["high_risk_count"] >= 1

    def test_non_lease_text_not_likely_lease(self, client):
        metadata = client.post("/api/v1/lease/analyze/text", data = {"lease_text" : "Quarterly sales grew by four percent."}).json()["metadata"]

        assert metadata["lease_score"] == 0
        assert metadata["likely_lease"] is False


class TestReportInput:
    def test_report_accepts_null_severity(self, client):
        analysis = {"summary"    : "s",
                    "disclaimer" : "d",
                    "flags"      : [{"type" : "late-fees", "excerpt" : "Late fee applies.", "explanation" : "x", "severity" : None}],
                   }
        response = client.post("/api/v1/lease/report", json = analysis)

        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")
