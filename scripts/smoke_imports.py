from provider_wellness.roi import ModelAssumptions, OrgDetails
from provider_wellness.sample_content import build_sample_index
from provider_wellness.scenarios import run_scenarios
from provider_wellness.search import SearchEngine


if __name__ == "__main__":
    engine = SearchEngine(build_sample_index())
    response = engine.search("burnout")
    scenarios = run_scenarios(
        OrgDetails(
            num_providers=100,
            year1_investment=500_000,
            sustaining_investment=250_000,
            projection_years=5,
            current_burnout_rate=0.5,
            current_turnover_rate=0.15,
            avg_salary=250_000,
        ),
        ModelAssumptions(),
    )
    print(
        {
            "search_status": response.status,
            "search_results": len(response.results),
            "top_result": response.results[0].candidate.title if response.results else None,
            "expected_roi": round(scenarios.expected.summary.final_roi, 1),
            "break_even": scenarios.expected.summary.break_even_year,
        }
    )
